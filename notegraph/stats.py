"""Corpus-wide statistics over the document graph and learning history."""

from collections import Counter

from .config import MOST_CONNECTED_LIMIT, RECENT_ACTIVITY_LIMIT, WEEKS_PER_MONTH
from .history import days_between, entry_timestamp
from .parse import round_half_up

DIFFICULTY_BUCKETS = ("easy", "medium", "hard")


def difficulty_bucket(difficulty):
    """Map a 1-5 difficulty onto easy (<=2), medium (3) or hard (>=4)."""
    if difficulty <= 2:
        return "easy"
    if difficulty == 3:
        return "medium"
    return "hard"


def count_connections(nodes, edges):
    """Number of edges touching each node, keyed by id in node order."""
    connections = {node["id"]: 0 for node in nodes}
    for e in edges:
        connections[e["source"]] = connections.get(e["source"], 0) + 1
        connections[e["target"]] = connections.get(e["target"], 0) + 1
    return connections


def _percent(part, whole):
    return round(part / whole * 100, 2) if whole else 0


def _recent_activity(history, now):
    dated = []
    for doc_id, entry in history.items():
        timestamp = entry_timestamp(entry)
        if timestamp is not None:
            dated.append((timestamp, doc_id))
    dated.sort(key=lambda item: item[0], reverse=True)
    recent = dated[:RECENT_ACTIVITY_LIMIT]

    last_7 = sum(1 for ts, _ in recent if days_between(ts, now) <= 7)
    last_30 = sum(1 for ts, _ in recent if days_between(ts, now) <= 30)
    return {
        "last7Days": last_7,
        "last30Days": last_30,
        "averagePerWeek": round(last_30 / WEEKS_PER_MONTH, 1),
    }


def calculate_statistics(nodes, edges, history, now):
    """Compute connectivity, distribution and progress figures.

    Args:
        nodes: parsed document nodes
        edges: all graph edges
        history: learning history mapping document id -> entry
        now: aware datetime the recency windows are measured against

    Returns:
        Flat dict of statistics; every count is 0 for an empty corpus.
    """
    by_id = {node["id"]: node for node in nodes}
    total = len(nodes)
    connections = count_connections(nodes, edges)

    most_connected = sorted(
        (
            {"id": doc_id, "title": by_id[doc_id]["title"] if doc_id in by_id else doc_id,
             "connections": count}
            for doc_id, count in connections.items()
        ),
        key=lambda d: d["connections"],
        reverse=True,
    )[:MOST_CONNECTED_LIMIT]

    isolated = [
        {"id": node["id"], "title": node["title"], "topic": node["topic"]}
        for node in nodes
        if connections[node["id"]] == 0
    ]

    topic_distribution = dict(Counter(node["topic"] for node in nodes))

    difficulty_distribution = dict.fromkeys(DIFFICULTY_BUCKETS, 0)
    for node in nodes:
        difficulty_distribution[difficulty_bucket(node["difficulty"])] += 1

    connection_distribution = {
        "isolated": len(isolated),
        "weaklyConnected": 0,
        "moderatelyConnected": 0,
        "highlyConnected": 0,
    }
    for count in connections.values():
        if 1 <= count <= 3:
            connection_distribution["weaklyConnected"] += 1
        elif 4 <= count <= 7:
            connection_distribution["moderatelyConnected"] += 1
        elif count >= 8:
            connection_distribution["highlyConnected"] += 1

    edge_type_distribution = dict(Counter(e["type"] for e in edges))

    completed = [node for node in nodes if node["id"] in history]

    topic_progress = {}
    for topic, topic_total in topic_distribution.items():
        topic_completed = sum(1 for node in completed if node["topic"] == topic)
        topic_progress[topic] = {
            "total": topic_total,
            "completed": topic_completed,
            "inProgress": 0,
            "notStarted": topic_total - topic_completed,
            "progressPercent": _percent(topic_completed, topic_total),
        }

    difficulty_progress = {
        bucket: {"total": difficulty_distribution[bucket], "completed": 0}
        for bucket in DIFFICULTY_BUCKETS
    }
    for node in completed:
        difficulty_progress[difficulty_bucket(node["difficulty"])]["completed"] += 1

    if total:
        average_word_count = round_half_up(sum(n["wordCount"] for n in nodes) / total)
        average_difficulty = round(sum(n["difficulty"] for n in nodes) / total, 2)
        average_keywords = round(sum(len(n["keywords"]) for n in nodes) / total, 1)
        average_connections = round(len(edges) * 2 / total, 2)
    else:
        average_word_count = average_difficulty = average_keywords = 0
        average_connections = 0

    graph_density = 0
    if total > 1:
        graph_density = round(len(edges) / (total * (total - 1) / 2), 4)

    return {
        "totalDocuments": total,
        "totalEdges": len(edges),
        "totalTopics": len(topic_distribution),
        "averageConnections": average_connections,
        "maxConnections": most_connected[0]["connections"] if most_connected else 0,
        "minConnections": 0,
        "topicDistribution": topic_distribution,
        "difficultyDistribution": difficulty_distribution,
        "connectionDistribution": connection_distribution,
        "edgeTypeDistribution": edge_type_distribution,
        "averageWordCount": average_word_count,
        "averageDifficulty": average_difficulty,
        "averageKeywordsPerDoc": average_keywords,
        "mostConnectedDocs": most_connected,
        "isolatedDocs": isolated,
        "graphDensity": graph_density,
        "completedDocuments": len(completed),
        "progressPercent": _percent(len(completed), total),
        "topicProgress": topic_progress,
        "difficultyProgress": difficulty_progress,
        "recentActivity": _recent_activity(history, now),
    }
