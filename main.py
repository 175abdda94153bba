import uvicorn

from fairshare.core.config import settings
from fairshare.main import app

if __name__ == "__main__":
    uvicorn.run("fairshare.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
