"""notegraph — Knowledge graph and learning recommendations for markdown notes."""

from .graph import (
    attach_backlinks,
    build_clusters,
    build_graph,
    build_link_edges,
    build_similarity_edges,
    jaccard_similarity,
    resolve_link_target,
)
from .history import load_learning_history, parse_timestamp
from .parse import (
    FrontMatter,
    estimate_difficulty,
    extract_concepts,
    extract_keywords,
    extract_links,
    parse_document,
    parse_front_matter,
)
from .pipeline import build_knowledge_graph, parse_corpus, write_knowledge_graph
from .recommend import estimate_reading_time, generate_recommendations
from .scan import find_markdown_files
from .stats import calculate_statistics

__all__ = [
    "attach_backlinks",
    "build_clusters",
    "build_graph",
    "build_link_edges",
    "build_similarity_edges",
    "jaccard_similarity",
    "resolve_link_target",
    "load_learning_history",
    "parse_timestamp",
    "FrontMatter",
    "estimate_difficulty",
    "extract_concepts",
    "extract_keywords",
    "extract_links",
    "parse_document",
    "parse_front_matter",
    "build_knowledge_graph",
    "parse_corpus",
    "write_knowledge_graph",
    "estimate_reading_time",
    "generate_recommendations",
    "find_markdown_files",
    "calculate_statistics",
]
