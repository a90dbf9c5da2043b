"""Build link and similarity edges, topic clusters and backlinks."""

from .config import MAX_CLUSTER_KEYWORDS, SIMILARITY_THRESHOLD


def jaccard_similarity(a, b):
    """Return |a & b| / |a | b|, or 0.0 when both are empty."""
    a, b = set(a), set(b)
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def resolve_link_target(target, nodes):
    """Find the node a link target refers to.

    A node matches when its id equals the target or its file path contains
    the target as a substring. The substring rule is loose: "sort.md" also
    matches "algorithms/quicksort.md". First match in node order wins.

    Returns the node id, or None for a dangling link.
    """
    for node in nodes:
        if node["id"] == target or target in node["filePath"]:
            return node["id"]
    return None


def build_link_edges(nodes):
    """One direct_link edge per link that resolves to another node."""
    edges = []
    for node in nodes:
        for target in node["links"]:
            target_id = resolve_link_target(target, nodes)
            if target_id is None or target_id == node["id"]:
                continue
            edges.append({
                "source": node["id"],
                "target": target_id,
                "type": "direct_link",
                "strength": 1.0,
            })
    return edges


def build_similarity_edges(nodes, threshold=SIMILARITY_THRESHOLD):
    """Connect every unordered pair whose keyword overlap exceeds threshold.

    Compares all pairs, so cost grows quadratically with the corpus.
    """
    edges = []
    for i, source in enumerate(nodes):
        for other in nodes[i + 1:]:
            similarity = jaccard_similarity(source["keywords"], other["keywords"])
            if similarity > threshold:
                shared = set(other["keywords"])
                edges.append({
                    "source": source["id"],
                    "target": other["id"],
                    "type": "keyword_similarity",
                    "strength": similarity,
                    "keywords": [k for k in source["keywords"] if k in shared],
                })
    return edges


def build_clusters(nodes):
    """Group nodes by topic, in the order topics are first seen."""
    clusters = {}
    for node in nodes:
        topic = node["topic"]
        if topic not in clusters:
            clusters[topic] = {"documents": [], "keywords": {}}
        clusters[topic]["documents"].append(node["id"])
        for keyword in node["keywords"]:
            clusters[topic]["keywords"].setdefault(keyword, None)

    return [
        {
            "id": topic,
            "topic": topic,
            "documents": c["documents"],
            "keywords": list(c["keywords"])[:MAX_CLUSTER_KEYWORDS],
            "centrality": len(c["documents"]),
        }
        for topic, c in clusters.items()
    ]


def build_graph(nodes, threshold=SIMILARITY_THRESHOLD):
    """Build all edges and clusters for a parsed corpus.

    Returns a dict with "edges" (direct links first, then similarity
    edges) and "clusters" keys.
    """
    edges = build_link_edges(nodes) + build_similarity_edges(nodes, threshold)
    return {"edges": edges, "clusters": build_clusters(nodes)}


def attach_backlinks(nodes, edges):
    """Return copies of nodes with backlinks filled from direct_link edges."""
    backlinks = {node["id"]: [] for node in nodes}
    for e in edges:
        if e["type"] != "direct_link":
            continue
        incoming = backlinks.get(e["target"])
        if incoming is not None and e["source"] not in incoming:
            incoming.append(e["source"])
    return [dict(node, backlinks=backlinks[node["id"]]) for node in nodes]
