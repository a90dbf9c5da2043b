"""Tests for notegraph.graph — link edges, similarity edges, clusters, backlinks."""

import pytest


class TestJaccardSimilarity:
    def test_identical_sets(self):
        from notegraph.graph import jaccard_similarity

        assert jaccard_similarity(["a", "b"], ["b", "a"]) == 1.0

    def test_both_empty_is_zero(self):
        from notegraph.graph import jaccard_similarity

        assert jaccard_similarity([], []) == 0.0

    def test_one_empty(self):
        from notegraph.graph import jaccard_similarity

        assert jaccard_similarity(["a"], []) == 0.0

    def test_partial_overlap(self):
        from notegraph.graph import jaccard_similarity

        assert jaccard_similarity(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)

    @pytest.mark.parametrize("a,b", [
        (["x"], ["y"]),
        (["x", "y", "z"], ["x"]),
        (list("abcdefghij"), list("fghijklmno")),
    ])
    def test_bounded(self, a, b):
        from notegraph.graph import jaccard_similarity

        assert 0.0 <= jaccard_similarity(a, b) <= 1.0


class TestResolveLinkTarget:
    def test_exact_id(self, make_node):
        from notegraph.graph import resolve_link_target

        nodes = [make_node("a.md"), make_node("b.md")]
        assert resolve_link_target("b.md", nodes) == "b.md"

    def test_substring_of_path(self, make_node):
        from notegraph.graph import resolve_link_target

        nodes = [make_node("algorithms/graphs.md")]
        assert resolve_link_target("graphs.md", nodes) == "algorithms/graphs.md"

    def test_loose_match_picks_first_node(self, make_node):
        from notegraph.graph import resolve_link_target

        # "sort.md" is a substring of "quicksort.md"; the loose rule accepts it
        nodes = [make_node("algorithms/quicksort.md"), make_node("sort.md")]
        assert resolve_link_target("sort.md", nodes) == "algorithms/quicksort.md"

    def test_self_match_shadows_exact_id(self, make_node):
        from notegraph.graph import build_link_edges, resolve_link_target

        # "a/b.md" contains "b.md", so the link resolves to its own source
        nodes = [make_node("a/b.md", links=["b.md"]), make_node("b.md")]
        assert resolve_link_target("b.md", nodes) == "a/b.md"
        assert build_link_edges(nodes) == []

    def test_dangling(self, make_node):
        from notegraph.graph import resolve_link_target

        assert resolve_link_target("missing.md", [make_node("a.md")]) is None


class TestBuildLinkEdges:
    def test_two_linked_documents(self, make_node):
        from notegraph.graph import build_link_edges

        nodes = [make_node("a.md", links=["b.md"]), make_node("b.md")]
        assert build_link_edges(nodes) == [{
            "source": "a.md",
            "target": "b.md",
            "type": "direct_link",
            "strength": 1.0,
        }]

    def test_dangling_link_dropped(self, make_node):
        from notegraph.graph import build_link_edges

        nodes = [make_node("a.md", links=["missing.md"])]
        assert build_link_edges(nodes) == []

    def test_self_link_dropped(self, make_node):
        from notegraph.graph import build_link_edges

        nodes = [make_node("a.md", links=["a.md"]), make_node("b.md")]
        assert build_link_edges(nodes) == []


class TestBuildSimilarityEdges:
    def test_identical_keywords(self, make_node):
        from notegraph.graph import build_similarity_edges

        keywords = [f"kw{chr(97 + i)}" for i in range(15)]
        nodes = [
            make_node("a.md", keywords=keywords),
            make_node("b.md", keywords=list(reversed(keywords))),
        ]
        edges = build_similarity_edges(nodes)
        assert len(edges) == 1
        assert edges[0]["source"] == "a.md"
        assert edges[0]["target"] == "b.md"
        assert edges[0]["type"] == "keyword_similarity"
        assert edges[0]["strength"] == 1.0
        assert edges[0]["keywords"] == keywords

    def test_threshold_is_exclusive(self, make_node):
        from notegraph.graph import build_similarity_edges

        # 3 shared out of 10 distinct = 0.3 exactly
        nodes = [
            make_node("a.md", keywords=list("abcdef")),
            make_node("b.md", keywords=list("defghij")),
        ]
        assert build_similarity_edges(nodes) == []

    def test_intersection_recorded_in_source_order(self, make_node):
        from notegraph.graph import build_similarity_edges

        nodes = [
            make_node("a.md", keywords=["tree", "heap", "graph"]),
            make_node("b.md", keywords=["graph", "tree"]),
        ]
        edges = build_similarity_edges(nodes)
        assert edges[0]["keywords"] == ["tree", "graph"]
        assert edges[0]["strength"] == pytest.approx(2 / 3)

    def test_empty_keywords_never_similar(self, make_node):
        from notegraph.graph import build_similarity_edges

        nodes = [make_node("a.md"), make_node("b.md")]
        assert build_similarity_edges(nodes) == []

    def test_one_edge_per_pair(self, make_node):
        from notegraph.graph import build_similarity_edges

        nodes = [make_node(f"{i}.md", keywords=["same"]) for i in range(4)]
        edges = build_similarity_edges(nodes)
        assert len(edges) == 6
        pairs = {frozenset((e["source"], e["target"])) for e in edges}
        assert len(pairs) == 6


class TestBuildClusters:
    def test_groups_by_topic(self, make_node):
        from notegraph.graph import build_clusters

        nodes = [
            make_node("a.md", topic="algorithms", keywords=["sort", "list"]),
            make_node("b.md", topic="databases", keywords=["sql"]),
            make_node("c.md", topic="algorithms", keywords=["list", "heap"]),
        ]
        clusters = build_clusters(nodes)
        assert [c["topic"] for c in clusters] == ["algorithms", "databases"]
        algorithms = clusters[0]
        assert algorithms["id"] == "algorithms"
        assert algorithms["documents"] == ["a.md", "c.md"]
        assert algorithms["keywords"] == ["sort", "list", "heap"]
        assert algorithms["centrality"] == 2

    def test_keywords_truncated_in_encounter_order(self, make_node):
        from notegraph.graph import build_clusters

        first = [f"a{chr(97 + i)}" for i in range(8)]
        second = [f"b{chr(97 + i)}" for i in range(8)]
        nodes = [
            make_node("a.md", keywords=first),
            make_node("b.md", keywords=second),
        ]
        (cluster,) = build_clusters(nodes)
        assert cluster["keywords"] == first + second[:2]

    def test_empty(self):
        from notegraph.graph import build_clusters

        assert build_clusters([]) == []


class TestBuildGraph:
    def test_link_edges_come_first(self, make_node):
        from notegraph.graph import build_graph

        nodes = [
            make_node("a.md", links=["b.md"], keywords=["x", "y"]),
            make_node("b.md", keywords=["x", "y"]),
        ]
        graph = build_graph(nodes)
        assert [e["type"] for e in graph["edges"]] == ["direct_link", "keyword_similarity"]
        assert len(graph["clusters"]) == 1

    def test_edges_reference_existing_nodes(self, sample_corpus):
        from notegraph.graph import build_graph
        from notegraph.pipeline import parse_corpus

        nodes = parse_corpus(sample_corpus)
        ids = {n["id"] for n in nodes}
        for e in build_graph(nodes)["edges"]:
            assert e["source"] in ids
            assert e["target"] in ids
            assert e["source"] != e["target"]

    def test_fixture_direct_links(self, sample_corpus):
        from notegraph.graph import build_graph
        from notegraph.pipeline import parse_corpus

        edges = build_graph(parse_corpus(sample_corpus))["edges"]
        links = [(e["source"], e["target"]) for e in edges if e["type"] == "direct_link"]
        assert links == [
            ("README.md", "algorithms/sorting.md"),
            ("algorithms/searching.md", "algorithms/sorting.md"),
            ("algorithms/sorting.md", "algorithms/searching.md"),
        ]


class TestAttachBacklinks:
    def test_fills_backlinks_without_mutating(self, make_node):
        from notegraph.graph import attach_backlinks, build_link_edges

        nodes = [
            make_node("a.md", links=["c.md", "c.md"]),
            make_node("b.md", links=["c.md"]),
            make_node("c.md"),
        ]
        result = attach_backlinks(nodes, build_link_edges(nodes))
        assert result[2]["backlinks"] == ["a.md", "b.md"]
        assert result[0]["backlinks"] == []
        assert nodes[2]["backlinks"] == []

    def test_similarity_edges_ignored(self, make_node):
        from notegraph.graph import attach_backlinks

        nodes = [make_node("a.md"), make_node("b.md")]
        edges = [{"source": "a.md", "target": "b.md",
                  "type": "keyword_similarity", "strength": 0.5, "keywords": []}]
        assert attach_backlinks(nodes, edges)[1]["backlinks"] == []
