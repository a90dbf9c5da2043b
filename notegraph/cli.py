"""
generate-knowledge-graph — Scan a notes corpus and write its knowledge graph.

Parses every markdown document, links them by explicit references and
shared keywords, computes learning statistics and recommendations from
.learning-history.json, and writes one JSON file for the site to load.

Usage:
    generate-knowledge-graph                        # corpus = current directory
    generate-knowledge-graph --root <dir>           # another corpus
    generate-knowledge-graph --output <file>        # default: <root>/assets/data/knowledge-graph.json
    generate-knowledge-graph --history <file>       # default: <root>/.learning-history.json
"""

import logging
import sys
from pathlib import Path

from .config import DEFAULT_OUTPUT
from .history import load_learning_history
from .pipeline import build_knowledge_graph, write_knowledge_graph


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    root = Path.cwd()
    output = None
    history_file = None

    i = 0
    while i < len(args):
        if args[i] == '--root' and i + 1 < len(args):
            root = Path(args[i + 1])
            i += 2
        elif args[i] == '--output' and i + 1 < len(args):
            output = Path(args[i + 1])
            i += 2
        elif args[i] == '--history' and i + 1 < len(args):
            history_file = Path(args[i + 1])
            i += 2
        elif args[i] in ('-h', '--help'):
            print(__doc__)
            return
        else:
            print(f"Error: unrecognized argument {args[i]}")
            print(__doc__)
            sys.exit(1)

    if not root.is_dir():
        print(f"Error: corpus directory not found: {root}")
        sys.exit(1)

    if output is None:
        output = root / DEFAULT_OUTPUT

    history = load_learning_history(history_file) if history_file else None

    print(f"Generating knowledge graph for {root}...")
    graph = build_knowledge_graph(root, history=history)

    try:
        write_knowledge_graph(graph, output)
    except OSError as e:
        print(f"Error: could not write {output}: {e}")
        sys.exit(1)

    print(f"\nKnowledge graph saved to {output}")
    print(f"  {len(graph['nodes'])} nodes")
    print(f"  {len(graph['edges'])} edges")
    print(f"  {len(graph['clusters'])} clusters")


if __name__ == "__main__":
    main()
