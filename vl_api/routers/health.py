from fastapi import APIRouter

from vl_plan import __version__
from vl_sdk import config_versions

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "version": __version__, "config": config_versions()}
