# hint_api.py
# Optional FastAPI wrapper for the tool functions.
# Run with: uvicorn apps.api.hint_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from hint_engine.sudoku_tools import (
    apply_hint_tool,
    compute_candidates_tool,
    next_hint,
    sanity_check,
    solve_tool,
)

app = FastAPI(title="Sudoku Hint Engine API")


class GridModel(BaseModel):
    grid: List[List[int]]


class SanityCheckRequest(BaseModel):
    original: List[List[int]]
    current: List[List[int]]


class NextHintRequest(BaseModel):
    current: List[List[int]]
    candidates: Optional[Dict[str, List[int]]] = None
    techniques: Optional[List[str]] = None


class SolveRequest(BaseModel):
    current: List[List[int]]
    techniques: Optional[List[str]] = None
    max_hints: Optional[int] = None


class ApplyHintRequest(BaseModel):
    current: List[List[int]]
    candidates: Optional[Dict[str, List[int]]] = None
    move: Dict[str, Any]


def _call(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/sanity_check")
def api_sanity(req: SanityCheckRequest):
    return _call(sanity_check, req.original, req.current)


@app.post("/compute_candidates")
def api_cands(payload: GridModel):
    return _call(compute_candidates_tool, payload.grid)


@app.post("/next_hint")
def api_next_hint(req: NextHintRequest):
    return _call(next_hint, req.current, req.candidates, {"techniques": req.techniques})


@app.post("/solve")
def api_solve(req: SolveRequest):
    return _call(solve_tool, req.current, {"techniques": req.techniques, "max_hints": req.max_hints})


@app.post("/apply_hint")
def api_apply(req: ApplyHintRequest):
    return _call(apply_hint_tool, req.current, req.candidates, req.move)
