"""FastAPI application serving the knowledge graph of a notes corpus.

Provides the full graph artifact plus statistics, recommendations, single
node neighbourhoods and clusters as JSON endpoints.

Run with:
    NOTEGRAPH_ROOT=path/to/notes uvicorn web.app:app
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException

from notegraph.config import DEFAULT_OUTPUT
from notegraph.pipeline import build_knowledge_graph, write_knowledge_graph

logger = logging.getLogger(__name__)


def create_app(root: Optional[Path] = None, output: Optional[Path] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        root: corpus directory (default: $NOTEGRAPH_ROOT, else cwd)
        output: where POST /api/rebuild writes the artifact
            (default: <root>/assets/data/knowledge-graph.json)
    """
    if root is None:
        root = Path(os.environ.get("NOTEGRAPH_ROOT", "."))
    root = Path(root)
    if output is None:
        output = root / DEFAULT_OUTPUT

    app = FastAPI(title="Knowledge Graph")
    app.state.root = root
    app.state.output = Path(output)
    app.state.graph = None
    app.state.lock = asyncio.Lock()

    async def rebuild() -> dict:
        graph = await asyncio.to_thread(build_knowledge_graph, app.state.root)
        app.state.graph = graph
        return graph

    async def current_graph() -> dict:
        async with app.state.lock:
            if app.state.graph is None:
                if not app.state.root.is_dir():
                    raise HTTPException(
                        status_code=500,
                        detail=f"Corpus directory not found: {app.state.root}"
                    )
                await rebuild()
            return app.state.graph

    def summary(graph: dict) -> dict:
        return {
            "nodes": len(graph["nodes"]),
            "edges": len(graph["edges"]),
            "clusters": len(graph["clusters"]),
            "generatedAt": graph["generatedAt"],
        }

    @app.get("/")
    async def root_summary():
        graph = await current_graph()
        return {"name": "Knowledge Graph", **summary(graph)}

    @app.get("/api/graph")
    async def get_graph():
        return await current_graph()

    @app.post("/api/rebuild")
    async def rebuild_graph():
        if not app.state.root.is_dir():
            raise HTTPException(
                status_code=500,
                detail=f"Corpus directory not found: {app.state.root}"
            )
        async with app.state.lock:
            graph = await rebuild()
        try:
            await asyncio.to_thread(write_knowledge_graph, graph, app.state.output)
        except OSError as e:
            logger.exception("Failed to write %s", app.state.output)
            raise HTTPException(status_code=500, detail=f"Could not write graph: {e}")
        return {"output": str(app.state.output), **summary(graph)}

    @app.get("/api/statistics")
    async def get_statistics():
        graph = await current_graph()
        return graph["statistics"]

    @app.get("/api/recommendations")
    async def get_recommendations():
        graph = await current_graph()
        return graph["recommendations"]

    @app.get("/api/nodes/{node_id:path}")
    async def get_node(node_id: str):
        graph = await current_graph()
        node = next((n for n in graph["nodes"] if n["id"] == node_id), None)
        if node is None:
            raise HTTPException(status_code=404, detail="Document not found")

        neighbors = []
        for e in graph["edges"]:
            if e["source"] == node_id:
                other = e["target"]
            elif e["target"] == node_id:
                other = e["source"]
            else:
                continue
            neighbors.append({"id": other, "type": e["type"], "strength": e["strength"]})

        return {**node, "neighbors": neighbors}

    @app.get("/api/clusters/{topic}")
    async def get_cluster(topic: str):
        graph = await current_graph()
        for cluster in graph["clusters"]:
            if cluster["topic"] == topic:
                return cluster
        raise HTTPException(status_code=404, detail="Cluster not found")

    return app


# Create the app instance for uvicorn
app = create_app()
