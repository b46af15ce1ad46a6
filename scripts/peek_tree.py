# scripts/peek_tree.py
# ELI5: show the scripts we parse out of a notation file, one node per line.

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from blocktext import CMouth, CWrap, Comment, DefineHat, parse  # noqa: E402
from blocktext.nodes import piece_text, walk  # noqa: E402


def describe(node):
    if isinstance(node, CWrap):
        return f"cwrap {node.shape} [{node.category}]"
    if isinstance(node, CMouth):
        return f"mouth{' (capend)' if node.capend else ''}"
    if isinstance(node, Comment):
        return f"// {node.text}"
    if isinstance(node, DefineHat):
        return f"define-hat '{piece_text(node.outline.pieces)}'"
    return f"{node.shape} [{node.category}] {node.blockid!r}"


def show(node, depth):
    print("  " * depth + describe(node))
    if isinstance(node, (CWrap, CMouth)):
        for child in node.contents:
            show(child, depth + 1)


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/peek_tree.py <file> [lang ...]")
        sys.exit(2)
    text = open(sys.argv[1], "r", encoding="utf-8").read()
    scripts = parse(text, languages=["en", *sys.argv[2:]])
    for n, script in enumerate(scripts, 1):
        nodes = sum(1 for _ in walk(script)) - 1
        print(f"SCRIPT {n} ({nodes} nodes){' (final)' if script.is_final else ''}:")
        for node in script:
            show(node, 1)
        print()


if __name__ == "__main__":
    main()
