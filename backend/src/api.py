import logging
import os
from typing import List, Optional

import sentry_sdk
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from sentry_sdk.integrations.aws_lambda import AwsLambdaIntegration

from analysis.analyze import analyze
from report import Report, UnknownFight

SENTRY_ENABLED = os.environ.get("AWS_EXECUTION_ENV") is not None
if SENTRY_ENABLED:
    sentry_sdk.init(
        dsn=os.environ.get("SENTRY_DSN"),
        traces_sample_rate=0.05,
        attach_stacktrace=True,
        integrations=[AwsLambdaIntegration()],
    )

CORS_ORIGINS = os.environ.get(
    "CORS_ORIGINS", "http://localhost:5173,https://www.fflogs.com"
).split(",")

app = FastAPI()


async def catch_exceptions_middleware(request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logging.exception(e)
        return Response("Internal server error", status_code=500)


# Add this middleware first so 500 errors have CORS headers
app.middleware("http")(catch_exceptions_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ReportMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    source_id: int
    source_name: Optional[str] = None
    end_time: Optional[int] = None


class FightDump(BaseModel):
    id: int
    start_time: int
    end_time: int
    encounter_name: Optional[str] = None
    boss_ids: List[int] = Field(default_factory=list)


class CombatLog(BaseModel):
    metadata: ReportMetadata
    events: List[dict]
    fights: List[FightDump]
    actors: List[dict] = Field(default_factory=list)
    combatant_info: dict = Field(default_factory=dict)


class AnalyzeResponse(BaseModel):
    data: dict


@app.post("/analyze_fight")
async def analyze_fight(response: Response, fight_id: int, combat_log: CombatLog):
    report = Report(combat_log.model_dump())
    logging.info(
        f"Analyzing fight {fight_id} for {report.source.name} ({len(combat_log.events)} events)"
    )

    try:
        events = analyze(report, fight_id)
    except UnknownFight:
        response.status_code = 404
        return {"error": f"Fight {fight_id} is not in this log"}

    response.headers["Cache-Control"] = "no-cache"
    return AnalyzeResponse(data=events)
