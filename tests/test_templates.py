import pytest

from workflow_graph import (
    WORKFLOW_TEMPLATES,
    SequentialIdGenerator,
    UuidIdGenerator,
    get_template,
    instantiate_template,
    simulate_workflow,
    validate_workflow,
)


class TestIdGenerators:

    def test_sequential_is_deterministic(self):
        gen = SequentialIdGenerator(prefix="dndnode_")
        assert [gen(set()) for _ in range(3)] == ["dndnode_0", "dndnode_1", "dndnode_2"]

    def test_sequential_skips_reserved(self):
        gen = SequentialIdGenerator(prefix="n", start=1)
        assert gen({"n1", "n2"}) == "n3"
        assert gen(set()) == "n4"

    def test_uuid_prefix_and_uniqueness(self):
        gen = UuidIdGenerator(prefix="node-")
        ids = {gen(()) for _ in range(50)}
        assert len(ids) == 50
        assert all(i.startswith("node-") for i in ids)


def test_catalog_ids_are_unique():
    ids = [t.id for t in WORKFLOW_TEMPLATES]
    assert len(ids) == len(set(ids))
    assert get_template("empty").nodes == []
    assert get_template("no-such-template") is None


@pytest.mark.parametrize("template", [t for t in WORKFLOW_TEMPLATES if t.nodes], ids=lambda t: t.id)
def test_non_empty_templates_are_valid_workflows(template):
    nodes, edges = instantiate_template(template)
    assert validate_workflow(nodes, edges).valid
    result = simulate_workflow(nodes, edges)
    assert result.success
    assert len(result.order) == len(template.nodes)


class TestInstantiate:

    def test_ids_are_replaced_and_edges_remapped(self):
        template = get_template("conditional")
        nodes, edges = instantiate_template(template, id_generator=SequentialIdGenerator(prefix="tpl_1_"))
        assert [n["id"] for n in nodes] == ["tpl_1_0", "tpl_1_1", "tpl_1_2"]
        assert [e["id"] for e in edges] == ["tpl_1_3", "tpl_1_4"]
        assert [(e["source"], e["target"]) for e in edges] == [
            ("tpl_1_0", "tpl_1_1"),
            ("tpl_1_1", "tpl_1_2"),
        ]
        assert [n["data"]["label"] for n in nodes] == ["Trigger", "Check condition", "Send email"]

    def test_reserved_ids_are_avoided(self):
        template = get_template("webhook-to-slack")
        reserved = {"tpl_0", "tpl_1"}
        nodes, edges = instantiate_template(template, reserved_ids=reserved)
        new_ids = {n["id"] for n in nodes} | {e["id"] for e in edges}
        assert not new_ids & reserved
        assert len(new_ids) == 3

    def test_repeated_loads_do_not_collide(self):
        template = get_template("dual-trigger-pipeline")
        first_nodes, first_edges = instantiate_template(template)
        taken = {n["id"] for n in first_nodes} | {e["id"] for e in first_edges}
        second_nodes, _ = instantiate_template(template, reserved_ids=taken)
        assert not taken & {n["id"] for n in second_nodes}

    def test_copies_do_not_share_state_with_the_catalog(self):
        template = get_template("schedule-email")
        nodes, _ = instantiate_template(template)
        nodes[0]["data"]["label"] = "changed"
        nodes[0]["position"]["x"] = -1
        assert template.nodes[0]["data"]["label"] == "Every day at 9am"
        assert template.nodes[0]["position"]["x"] == 100
        assert template.nodes[0]["id"] == "n1"
