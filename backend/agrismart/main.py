import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrismart import __version__
from agrismart.api import router
from agrismart.core import settings
from agrismart.utils import setup_logging

setup_logging()

app = FastAPI(
    title="AgriSmart Plant Advisor API",
    version=__version__,
    description="Plant-health assessment from sensor readings, with live weather and a rule-based fallback.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "AgriSmart backend is running", "docs": "/docs"}


def main() -> None:
    uvicorn.run("agrismart.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
