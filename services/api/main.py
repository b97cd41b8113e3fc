from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dcc_class_sheet.builder import BuilderValidationError, ClassBuilder
from dcc_class_sheet.config import DEFAULT_BUILDER_ICON
from dcc_class_sheet.grouping import classify, order_group_names
from dcc_class_sheet.models import LabeledRecord, NamingToken, PrefixedSkill
from dcc_class_sheet.name_parser import parse_name
from dcc_class_sheet.naming import resolve_label
from dcc_class_sheet.runtime import (
    assert_runtime_compatibility,
    configure_logging,
    sheet_config_from_dict,
    sheet_config_from_env,
)
from dcc_class_sheet.view import build_sheet_view


app = FastAPI(title="DCC Custom Class Sheet API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class RecordIn(BaseModel):
    id: str = Field(min_length=1)
    name: str = ""
    description: str = ""
    kind: str = "skill"
    updated_at: float = 0

    def to_record(self) -> LabeledRecord:
        return LabeledRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            kind=self.kind,
            updated_at=self.updated_at,
        )


class ClassifyRequest(BaseModel):
    records: list[RecordIn] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class ParseRequest(BaseModel):
    name: str = ""


class SkillDraftIn(BaseModel):
    name: str = ""
    description: str = ""
    weight: int = Field(default=0, ge=0)


class BuilderRequest(BaseModel):
    class_name: str = ""
    icon_class: str = DEFAULT_BUILDER_ICON
    parent_folder: str | None = None
    folder_id: str | None = None
    skills: list[SkillDraftIn] = Field(default_factory=list)


@app.on_event("startup")
def startup_event() -> None:
    assert_runtime_compatibility()
    configure_logging()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/parse")
def parse(payload: ParseRequest) -> dict[str, Any]:
    token = parse_name(payload.name)
    if isinstance(token, NamingToken):
        return {"kind": "naming", "label": token.label}
    if isinstance(token, PrefixedSkill):
        return {
            "kind": "prefixed",
            "class_name": token.class_name,
            "weight": token.weight,
            "skill_name": token.skill_name,
        }
    return {"kind": "plain"}


@app.post("/v1/classify")
def classify_records(payload: ClassifyRequest) -> dict[str, Any]:
    config = sheet_config_from_dict(payload.options, base=sheet_config_from_env())

    records = [item.to_record() for item in payload.records]
    view = build_sheet_view(records, config)
    result = classify(records, config.naming_token)

    body = view.to_dict()
    body["group_order"] = order_group_names(result.group_names(), resolve_label(records, config.naming_token))
    body["occupational_ids"] = [record.id for record in result.occupational]
    return body


@app.post("/v1/builder/records")
def build_class_records(payload: BuilderRequest) -> dict[str, Any]:
    builder = ClassBuilder(
        class_name=payload.class_name,
        icon_class=payload.icon_class,
        parent_folder=payload.parent_folder,
    )
    for skill in payload.skills:
        builder.add_skill(skill.name, skill.description, skill.weight)

    try:
        records = builder.build_records(folder_id=payload.folder_id)
    except BuilderValidationError as exc:
        raise HTTPException(status_code=400, detail={"error": exc.code, "message": str(exc)}) from exc

    return {
        "folder": records.folder,
        "items": records.items(),
        "sorted_skills": [skill.name for skill in builder.sorted_skills()],
        "icon_preview": builder.icon_preview,
    }
