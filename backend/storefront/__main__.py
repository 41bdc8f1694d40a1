"""
Run the API server: python -m storefront
"""
import uvicorn

from storefront.core.config import settings


def main():
    uvicorn.run("storefront.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
