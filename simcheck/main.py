from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simcheck.logger import logger
from simcheck.routers.comparison import router as comparison_router

app = FastAPI(title="simcheck")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(comparison_router)

logger.info("simcheck API ready")
