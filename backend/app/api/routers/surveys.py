from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.survey import SurveyIn, SurveyRecord
from app.services.store import SurveyStore

router = APIRouter()


def get_store(db: Session = Depends(get_db)) -> SurveyStore:
    return SurveyStore(db)


@router.get("/ping")
def ping():
    return {"ok": True, "router": "surveys"}


@router.get("")
@router.get("/")
def list_surveys(store: SurveyStore = Depends(get_store)) -> list[SurveyRecord]:
    return store.list_all()


@router.post("")
@router.post("/")
def create_survey(payload: SurveyIn, store: SurveyStore = Depends(get_store)) -> SurveyRecord:
    new_id = store.insert(payload)
    return store.get(new_id)


@router.delete("")
@router.delete("/")
def clear_surveys(store: SurveyStore = Depends(get_store)):
    return {"ok": True, "deleted": store.clear()}


@router.get("/{survey_id}")
def get_survey(survey_id: int, store: SurveyStore = Depends(get_store)) -> SurveyRecord:
    s = store.get(survey_id)
    if not s:
        raise HTTPException(status_code=404, detail="survey not found")
    return s


@router.delete("/{survey_id}")
def delete_survey(survey_id: int, store: SurveyStore = Depends(get_store)):
    if not store.delete(survey_id):
        raise HTTPException(status_code=404, detail="survey not found")
    return {"ok": True}
