"""Pytest configuration and fixtures."""
import json

import pytest


def make_nodes(*ids):
    return [{"id": i, "position": {"x": 0, "y": 0}, "data": {"label": i}} for i in ids]


def make_edges(*pairs):
    return [{"id": f"e{s}-{t}", "source": s, "target": t} for s, t in pairs]


def as_sets(cycles):
    return {frozenset(c) for c in cycles}


@pytest.fixture
def diamond():
    nodes = make_nodes("1", "2", "3", "4")
    edges = make_edges(("1", "2"), ("1", "3"), ("2", "4"), ("3", "4"))
    return nodes, edges


@pytest.fixture
def workflow_file(tmp_path):
    """Write a workflow document to a temp file and return its path."""
    def _write(nodes, edges, **extra):
        path = tmp_path / "workflow.json"
        path.write_text(json.dumps({"nodes": nodes, "edges": edges, **extra}), encoding="utf-8")
        return str(path)
    return _write
