from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from typing import List, Dict
import logging, math

# Local imports (support both package and direct run)
try:
    from hillclimb.algorithms.hill_climbing import hill_climbing, SearchResult, TraceStep
    from hillclimb.services.graph_service import GraphModel, build_graph
    from hillclimb.services.export_service import trace_to_text, vertex_label
    import hillclimb.config as config
except Exception:
    from algorithms.hill_climbing import hill_climbing, SearchResult, TraceStep  # type: ignore
    from services.graph_service import GraphModel, build_graph  # type: ignore
    from services.export_service import trace_to_text, vertex_label  # type: ignore
    import config as config  # type: ignore

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Hill Climbing Trace API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===== Schemas =====
class Vertex(BaseModel):
    id: str
    heuristic: float = Field(0.0, description="Lower values are explored first")

class Edge(BaseModel):
    source: str
    target: str

class SearchRequest(BaseModel):
    vertices: List[Vertex]
    edges: List[Edge] = Field(default_factory=list)
    start: str
    goal: str

# ===== Helpers =====
def _ensure_request(req: SearchRequest) -> None:
    if not req.vertices:
        raise HTTPException(status_code=400, detail="at least one vertex is required")
    for v in req.vertices:
        if not math.isfinite(v.heuristic) or v.heuristic < 0:
            raise HTTPException(status_code=400, detail=f"heuristic of '{v.id}' must be a finite, non-negative number")
    if not req.start.strip() or not req.goal.strip():
        raise HTTPException(status_code=400, detail="start and goal must be non-empty vertex ids")

def _graph_from(req: SearchRequest) -> GraphModel:
    return build_graph(
        [(v.id, v.heuristic) for v in req.vertices],
        [(e.source, e.target) for e in req.edges],
    )

def _run(req: SearchRequest):
    _ensure_request(req)
    graph = _graph_from(req)
    return graph, hill_climbing(graph, req.start, req.goal)

def _step_payload(step: TraceStep, graph: GraphModel) -> Dict:
    return {
        "expanded_node": step.expanded_node,
        "raw_adjacency": list(step.raw_adjacency),
        "sorted_adjacency": list(step.sorted_adjacency),
        "residual_frontier": list(step.residual_frontier),
        "is_goal": step.is_goal,
        "labels": {
            "expanded_node": vertex_label(graph, step.expanded_node),
            "raw_adjacency": [vertex_label(graph, v) for v in step.raw_adjacency],
            "sorted_adjacency": [vertex_label(graph, v) for v in step.sorted_adjacency],
            "residual_frontier": [vertex_label(graph, v) for v in step.residual_frontier],
        },
    }

def _result_payload(result: SearchResult, graph: GraphModel) -> Dict:
    return {
        "start": result.start,
        "goal": result.goal,
        "goal_reached": result.goal_reached,
        "outcome": result.outcome.value,
        "path": result.path,
        "path_string": result.path_string,
        "expanded": result.expanded,
        "runtime_ms": result.runtime_ms,
        "trace": [_step_payload(s, graph) for s in result.trace],
    }

# ===== Routes =====

@app.get("/health")
def health():
    return {"ok": True, "version": app.version}

@app.post("/search")
def search(req: SearchRequest):
    graph, result = _run(req)
    return _result_payload(result, graph)

@app.post("/search/export", response_class=PlainTextResponse)
def search_export(req: SearchRequest):
    graph, result = _run(req)
    return PlainTextResponse(
        trace_to_text(result, graph),
        headers={"Content-Disposition": f'attachment; filename="{config.EXPORT_FILENAME}"'},
    )

# Run: uvicorn hillclimb.app:app --reload --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hillclimb.app:app", host=config.API_HOST, port=config.API_PORT, reload=True)
