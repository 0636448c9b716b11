import asyncio
import logging
import os
import tempfile

from dotenv import load_dotenv

from objstore import AsyncObjectStorage, ObjectStorage

load_dotenv()


def log_response(method: str, url: str, status: int | None, headers) -> None:
    print(f"{method} {url} -> {status}")


async def main() -> None:
    if not os.getenv("ST_AUTH"):
        raise SystemExit("Set ST_AUTH, ST_USER and ST_KEY")

    with tempfile.NamedTemporaryFile("wb", suffix=".txt", delete=False) as tmp:
        tmp.write(b"hello from python\n" * 1024)
        local_path = tmp.name

    # 1) Blocking client
    with ObjectStorage(observer=log_response) as store:
        store.create("examples")
        url = store.put_file(local_path, "examples/hello.txt", {"Content-Type": "text/plain"})
        print("uploaded:", url)
        print("meta:", dict(store.get_meta("examples/hello.txt")))

    # 2) Async client
    async with AsyncObjectStorage(observer=log_response) as client:
        await client.copy("examples/hello.txt", "examples/hello-copy.txt")
        print("listing:", await client.list("examples", {"format": "json"}))
        await client.delete_file("examples/hello-copy.txt")
        await client.delete_file("examples/hello.txt")

    os.unlink(local_path)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if os.getenv("DEBUG") else logging.INFO)
    asyncio.run(main())
