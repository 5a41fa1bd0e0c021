"""Tests for the plugin catalogue and its metadata files."""

import json

from docsite.catalog import (
    PluginDescriptor,
    generate_plugins_metadata,
    load_descriptors,
    recent_plugins,
    sorted_plugins,
    to_metadata,
)


def test_load_descriptors_preserves_order(config):
    descriptors = load_descriptors(config.plugins_path)
    assert [d.name for d in descriptors] == ["Temporal", "RuleFlow", "BatchQueue"]
    assert descriptors[1].link == "/RuleFlow/"


def test_load_descriptors_missing_file(tmp_path):
    assert load_descriptors(tmp_path / "nope.yaml") == []


def test_to_metadata_shape():
    d = PluginDescriptor(title="RuleFlow Plugin", details="Rules.", link="/RuleFlow/", name="RuleFlow")
    assert to_metadata(d) == {
        "title": "RuleFlow Plugin",
        "description": "Rules.",
        "slug": "RuleFlow",
        "path": "/RuleFlow/",
        "name": "RuleFlow",
    }


def test_recent_and_sorted(config):
    descriptors = load_descriptors(config.plugins_path)
    assert [d.name for d in recent_plugins(descriptors, 2)] == ["Temporal", "RuleFlow"]
    assert [d.name for d in sorted_plugins(descriptors)] == ["BatchQueue", "RuleFlow", "Temporal"]


def test_generate_plugins_metadata_writes_files(config, tmp_path):
    descriptors = load_descriptors(config.plugins_path)
    public_dir = tmp_path / "public"

    result = generate_plugins_metadata(descriptors, public_dir, recent_count=1)

    assert [p["name"] for p in result] == ["Temporal", "RuleFlow", "BatchQueue"]
    full = json.loads((public_dir / "plugins-metadata.json").read_text())
    recent = json.loads((public_dir / "recent-plugins.json").read_text())
    assert [p["name"] for p in full] == ["BatchQueue", "RuleFlow", "Temporal"]
    assert [p["name"] for p in recent] == ["Temporal"]


def test_generate_plugins_metadata_empty(tmp_path):
    assert generate_plugins_metadata([], tmp_path) == []
    assert json.loads((tmp_path / "recent-plugins.json").read_text()) == []
