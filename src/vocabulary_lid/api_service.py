from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .classifier import LanguageClassifier
from .config import LidConfig
from .errors import InvalidConfigError
from .languages import language_for_name
from .results import vocabulary_distribution
from .training import LabeledRecord, Trainer

API_SCHEMA_VERSION = 1


class ApiModel(BaseModel):
    # Backward compatibility: ignore unknown request fields by default.
    model_config = ConfigDict(extra="ignore")


class RecordIn(ApiModel):
    text: str
    language: str


class TrainRequest(ApiModel):
    schema_version: int = Field(default=API_SCHEMA_VERSION, ge=1)
    records: list[RecordIn]
    # When set, hold out (1 - axiom_ratio) of the records and classify them blind.
    axiom_ratio: Optional[float] = None
    seed: Optional[int] = None


class ClassifyRequest(ApiModel):
    schema_version: int = Field(default=API_SCHEMA_VERSION, ge=1)
    text: str


class TrainResponse(ApiModel):
    schema_version: int
    n_records: int
    n_skipped: int
    validation: Optional[dict[str, Any]] = None


class ClassifyResponse(ApiModel):
    schema_version: int
    winner: Optional[str]
    scores: dict[str, float]
    words: dict[str, list[dict[str, Any]]]


class VocabularyResponse(ApiModel):
    schema_version: int
    language: str
    n_axioms: int
    n_inductions: int
    words: list[dict[str, Any]]


def _ensure_supported_schema_version(v: int) -> None:
    # Backward-compat policy:
    # - missing schema_version -> defaults to current
    # - equal version -> accepted
    # - future version -> explicit client error
    if int(v) > API_SCHEMA_VERSION:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Unsupported schema_version={v}. "
                f"Server supports <= {API_SCHEMA_VERSION}."
            ),
        )


def create_app(config: Optional[LidConfig] = None) -> FastAPI:
    """Build an app around one in-memory classifier; vocabularies live as long as the app."""
    classifier = LanguageClassifier(config=config)
    trainer = Trainer(classifier)

    app = FastAPI(
        title="Vocabulary LID API",
        version=str(API_SCHEMA_VERSION),
        description="FastAPI wrapper for vocabulary-lid training and classification.",
    )

    @app.get("/healthz")
    def healthz() -> dict[str, object]:
        return {"ok": True, "schema_version": API_SCHEMA_VERSION}

    @app.post("/train", response_model=TrainResponse)
    def train_endpoint(req: TrainRequest) -> TrainResponse:
        _ensure_supported_schema_version(req.schema_version)
        records: list[LabeledRecord] = []
        n_skipped = 0
        for r in req.records:
            lang = language_for_name(r.language)
            if lang is None or not r.text.strip():
                n_skipped += 1
                continue
            records.append(LabeledRecord(language=lang, text=r.text))

        validation: Optional[dict[str, Any]] = None
        try:
            if req.axiom_ratio is None:
                trainer.ingest_records(records)
            else:
                rep = trainer.ingest_unlabeled_batch(records, req.axiom_ratio, seed=req.seed)
                validation = rep.summary()
        except InvalidConfigError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return TrainResponse(
            schema_version=API_SCHEMA_VERSION,
            n_records=len(records),
            n_skipped=n_skipped,
            validation=validation,
        )

    @app.post("/classify", response_model=ClassifyResponse)
    def classify_endpoint(req: ClassifyRequest) -> ClassifyResponse:
        _ensure_supported_schema_version(req.schema_version)
        d = classifier.classify(req.text or "").to_dict()
        return ClassifyResponse(
            schema_version=API_SCHEMA_VERSION,
            winner=d["winner"],  # type: ignore[arg-type]
            scores=d["scores"],  # type: ignore[arg-type]
            words=d["words"],  # type: ignore[arg-type]
        )

    @app.get("/vocabulary/{language}", response_model=VocabularyResponse)
    def vocabulary_endpoint(language: str, top: int = 50) -> VocabularyResponse:
        lang = language_for_name(language)
        if lang is None:
            raise HTTPException(status_code=404, detail=f"Unknown language: {language}")
        dist = vocabulary_distribution(classifier.store, languages=[lang])[0]
        words = sorted(
            classifier.store.vocabulary(lang).snapshot(), key=lambda w: (-w.weight, w.text)
        )
        if top > 0:
            words = words[:top]
        return VocabularyResponse(
            schema_version=API_SCHEMA_VERSION,
            language=lang.value,
            n_axioms=dist.n_axioms,
            n_inductions=dist.n_inductions,
            words=[{"text": w.text, "weight": w.weight, "kind": w.kind.value} for w in words],
        )

    return app


app = create_app()
