"""Run the API server."""
import uvicorn
from dotenv import load_dotenv

from listing_api.core.config import settings


def main():
    load_dotenv()
    uvicorn.run(
        "listing_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
