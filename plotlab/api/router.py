from fastapi import APIRouter
from plotlab.routers import charts, datasets, stats

api_router = APIRouter()
api_router.include_router(datasets.router, prefix="/datasets", tags=["datasets"])
api_router.include_router(stats.router, prefix="/datasets", tags=["stats"])
api_router.include_router(charts.router, tags=["charts"])
