import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ReadyOut

router = APIRouter()
logger = logging.getLogger("recipebook.ready")


@router.get("/ready", response_model=ReadyOut)
def ready(db: Session = Depends(get_db)):
    database_ok = False
    try:
        db.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError:
        logger.exception("Database check failed")
    return {"ok": True, "database_ok": database_ok}
