"""Learning recommendations: what to read next, what to review, where to go."""

import math
import re
from collections import Counter

from .config import (
    LEARNING_PATH_STEPS,
    LEARNING_PATH_TOPICS,
    NEXT_TO_LEARN_LIMIT,
    RECOMMENDATION_EXCLUDE_PATTERN,
    RELATED_DOCS_LIMIT,
    REVIEW_LIMIT,
    REVIEW_MIN_DAYS,
    SUGGESTED_KEYWORDS_LIMIT,
    WEEKLY_GOAL_MAX,
    WEEKLY_GOAL_MIN,
    WEEKLY_GOAL_RATES,
    WORDS_PER_MINUTE,
)
from .history import days_between, entry_date, entry_timestamp

EXCLUDE_RE = re.compile(RECOMMENDATION_EXCLUDE_PATTERN, re.IGNORECASE)


def estimate_reading_time(word_count):
    """Reading time in whole minutes, never less than one."""
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def _touching_edges(edges):
    touching = {}
    for e in edges:
        touching.setdefault(e["source"], []).append(e)
        touching.setdefault(e["target"], []).append(e)
    return touching


def next_to_learn(nodes, edges, completed, limit=NEXT_TO_LEARN_LIMIT):
    """Rank unstudied documents, favouring easy ones near finished work.

    score = (6 - difficulty) * 10 + completed neighbours * 5 + edges * 2
    """
    touching = _touching_edges(edges)
    candidates = []
    for node in nodes:
        if node["id"] in completed or EXCLUDE_RE.search(node["id"]):
            continue

        related = touching.get(node["id"], [])
        completed_related = sum(
            1 for e in related
            if (e["target"] if e["source"] == node["id"] else e["source"]) in completed
        )
        score = (6 - node["difficulty"]) * 10 + completed_related * 5 + len(related) * 2

        if completed_related:
            reason = f"Connected to {completed_related} studied document(s)"
        else:
            reason = "Foundational concept"

        candidates.append({
            "id": node["id"],
            "title": node["title"],
            "topic": node["topic"],
            "difficulty": node["difficulty"],
            "reason": reason,
            "score": score,
            "estimatedTime": estimate_reading_time(node["wordCount"]),
        })

    candidates.sort(key=lambda c: c["score"], reverse=True)
    return candidates[:limit]


def _review_reason(days_since):
    if days_since > 30:
        return "Over a month since last study"
    if days_since > 14:
        return "Over two weeks since last study"
    return "Due for review"


def review_recommended(nodes, history, now, limit=REVIEW_LIMIT):
    """Studied documents that have gone at least a week without review.

    Harder documents come up sooner: score = days since + difficulty * 5.
    """
    by_id = {node["id"]: node for node in nodes}
    due = []
    for doc_id, entry in history.items():
        node = by_id.get(doc_id)
        last_studied = entry_timestamp(entry)
        if node is None or last_studied is None:
            continue

        days_since = math.floor(days_between(last_studied, now))
        if days_since < REVIEW_MIN_DAYS:
            continue

        due.append({
            "id": node["id"],
            "title": node["title"],
            "topic": node["topic"],
            "difficulty": node["difficulty"],
            "lastStudied": entry_date(entry),
            "daysSince": days_since,
            "reason": _review_reason(days_since),
            "reviewScore": days_since + node["difficulty"] * 5,
        })

    due.sort(key=lambda d: d["reviewScore"], reverse=True)
    return due[:limit]


def suggested_keywords(nodes, completed, limit=SUGGESTED_KEYWORDS_LIMIT):
    """Keywords that recur across documents not yet studied."""
    remaining = [node for node in nodes if node["id"] not in completed]
    frequency = Counter(k for node in remaining for k in node["keywords"])

    suggestions = []
    for keyword, count in frequency.most_common(limit):
        related = [n for n in remaining if keyword in n["keywords"]][:RELATED_DOCS_LIMIT]
        suggestions.append({
            "keyword": keyword,
            "frequency": count,
            "relatedDocs": [{"id": n["id"], "title": n["title"]} for n in related],
        })
    return suggestions


def learning_paths(nodes, completed, topics=LEARNING_PATH_TOPICS,
                   max_steps=LEARNING_PATH_STEPS):
    """Easiest-first reading order per topic over unstudied documents."""
    paths = {}
    for topic in topics:
        topic_docs = [
            n for n in nodes if n["topic"] == topic and n["id"] not in completed
        ]
        if not topic_docs:
            continue

        ordered = sorted(topic_docs, key=lambda n: n["difficulty"])[:max_steps]
        path = [
            {
                "step": index + 1,
                "id": node["id"],
                "title": node["title"],
                "difficulty": node["difficulty"],
                "estimatedTime": estimate_reading_time(node["wordCount"]),
            }
            for index, node in enumerate(ordered)
        ]
        paths[topic] = {
            "topic": topic,
            "totalSteps": len(path),
            "totalTime": sum(step["estimatedTime"] for step in path),
            "path": path,
        }
    return paths


def weekly_goal(statistics):
    """Default weekly targets scaled from corpus size and difficulty mix."""
    distribution = statistics["difficultyDistribution"]
    recommended = math.floor(statistics["totalDocuments"] * WEEKLY_GOAL_RATES["recommended"])
    return {
        "recommended": max(WEEKLY_GOAL_MIN, min(WEEKLY_GOAL_MAX, recommended)),
        "easy": math.ceil(distribution["easy"] * WEEKLY_GOAL_RATES["easy"]),
        "medium": math.ceil(distribution["medium"] * WEEKLY_GOAL_RATES["medium"]),
        "hard": math.ceil(distribution["hard"] * WEEKLY_GOAL_RATES["hard"]),
    }


def generate_recommendations(nodes, edges, history, statistics, now):
    """Assemble every recommendation list into one bundle.

    Args:
        nodes: parsed document nodes
        edges: all graph edges
        history: learning history mapping document id -> entry
        statistics: output of calculate_statistics()
        now: aware datetime used to age history entries

    Returns:
        Dict with nextToLearn, reviewRecommended, suggestedKeywords,
        learningPaths, weeklyGoal and summary keys.
    """
    completed = set(history)
    goal = weekly_goal(statistics)
    review = review_recommended(nodes, history, now)

    return {
        "nextToLearn": next_to_learn(nodes, edges, completed),
        "reviewRecommended": review,
        "suggestedKeywords": suggested_keywords(nodes, completed),
        "learningPaths": learning_paths(nodes, completed),
        "weeklyGoal": goal,
        "summary": {
            "totalUnread": statistics["totalDocuments"] - statistics["completedDocuments"],
            "readyToReview": len(review),
            "suggestedDaily": math.ceil(goal["recommended"] / 7),
        },
    }
