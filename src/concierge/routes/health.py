from litestar import get


@get(path="/health")
async def health() -> str:
    return "healthy"
