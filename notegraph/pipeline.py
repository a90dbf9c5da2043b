"""Run the full scan -> parse -> graph -> stats -> recommendations pipeline."""

import json
import logging
import os
import tempfile
from pathlib import Path

from .config import EXCLUDE_DIRS, HISTORY_FILENAME
from .graph import attach_backlinks, build_graph
from .history import load_learning_history, utc_now
from .parse import parse_document
from .recommend import generate_recommendations
from .scan import find_markdown_files
from .stats import calculate_statistics

logger = logging.getLogger(__name__)


def parse_corpus(root, exclude_dirs=EXCLUDE_DIRS):
    """Parse every markdown file under root, skipping ones that fail."""
    root = Path(root)
    nodes = []
    for file_path in find_markdown_files(root, exclude_dirs):
        node = parse_document(file_path, root)
        if node is not None:
            nodes.append(node)
    return nodes


def format_timestamp(moment):
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_knowledge_graph(root, history=None, now=None, exclude_dirs=EXCLUDE_DIRS):
    """Build the complete knowledge graph artifact for a corpus.

    Args:
        root: corpus directory
        history: learning history mapping; read from the corpus root's
            history file when None
        now: aware UTC datetime for recency and review ages (default: now)
        exclude_dirs: directory names the scanner skips

    Returns:
        Dict with nodes, edges, clusters, statistics, recommendations,
        learningHistory and generatedAt keys.
    """
    root = Path(root)
    if now is None:
        now = utc_now()
    if history is None:
        history = load_learning_history(root / HISTORY_FILENAME)

    nodes = parse_corpus(root, exclude_dirs)
    logger.info("Parsed %d documents under %s", len(nodes), root)

    graph = build_graph(nodes)
    edges = graph["edges"]
    statistics = calculate_statistics(nodes, edges, history, now)
    recommendations = generate_recommendations(nodes, edges, history, statistics, now)

    return {
        "nodes": attach_backlinks(nodes, edges),
        "edges": edges,
        "clusters": graph["clusters"],
        "statistics": statistics,
        "recommendations": recommendations,
        "learningHistory": history,
        "generatedAt": format_timestamp(now),
    }


def write_knowledge_graph(graph, output_path):
    """Write the artifact as pretty-printed JSON.

    The file is written to a temporary sibling and moved into place, so the
    output is either complete or untouched. Raises OSError on failure.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(graph, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote knowledge graph to %s", output_path)
    return output_path
