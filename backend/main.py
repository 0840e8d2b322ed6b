from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api.models import ApiHash, ApiHashComponents, ApiInitialVisibility
from api.session import open_session, prepare_map
from layers.types import LayerConfigError
from logs import configure_logging
from scenarios.config import log_level
from scenarios.registry import UnknownScenarioError, get_scenario, list_scenarios
from urlhash.codec import InvalidHashError, decode_hash, encode_hash

configure_logging(log_level())

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _scenario_or_404(scenario_id: str):
    try:
        return get_scenario(scenario_id)
    except UnknownScenarioError:
        raise HTTPException(status_code=404, detail=f"Unknown scenario: {scenario_id}")
    except LayerConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/scenarios")
def scenarios():
    try:
        rows = list_scenarios()
    except LayerConfigError as e:
        logger.warning(f"Invalid layer switcher config: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return [
        {"id": cfg.id, "title": cfg.title, "defaultView": cfg.defaultView.model_dump()}
        for cfg in rows
    ]


@app.get("/scenarios/{scenario_id}/layers")
def scenario_layers(scenario_id: str, hash: str = ""):
    cfg = _scenario_or_404(scenario_id).config
    switcher, url_hash = open_session(cfg.id, hash)
    return {
        "title": switcher.title,
        "items": switcher.items(),
        "layers": switcher.get_url_string(),
        "parameters": url_hash.parameters,
    }


@app.post("/hash/decode")
def hash_decode(body: ApiHash) -> ApiHashComponents:
    try:
        return ApiHashComponents.from_components(decode_hash(body.hash))
    except InvalidHashError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/hash/encode")
def hash_encode(body: ApiHashComponents) -> ApiHash:
    try:
        return ApiHash(hash=encode_hash(body.to_components()))
    except InvalidHashError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/style/initial-visibility")
def style_initial_visibility(body: ApiInitialVisibility):
    cfg = _scenario_or_404(body.scenarioId).config
    return prepare_map(cfg.id, body.hash, body.style)
