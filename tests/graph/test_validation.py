"""Tests for the pre-save structural check."""

from flowedit.graph import Approved, FlowEdge, Rejected, SaveValidator, Snapshot
from flowedit.graph.validation import rootless_nodes
from graph_test_helpers import make_node


def _snapshot(node_ids, edges=()):
    return Snapshot(
        nodes=tuple(make_node(i) for i in node_ids),
        edges=tuple(FlowEdge.between(s, t) for s, t in edges),
    )


class TestSaveValidator:
    """Tests for SaveValidator.validate()."""

    def test_empty_graph_approved(self):
        assert isinstance(SaveValidator().validate(Snapshot()), Approved)

    def test_single_node_approved(self):
        result = SaveValidator().validate(_snapshot(["1"]))
        assert isinstance(result, Approved)
        assert result.approved

    def test_multiple_roots_rejected(self):
        result = SaveValidator().validate(_snapshot(["1", "2", "3"], [("1", "2")]))

        assert isinstance(result, Rejected)
        assert not result.approved
        assert result.reason.startswith("2 nodes have no incoming edges")
        assert result.rootless_ids == ("1", "3")

    def test_single_root_approved(self):
        # Fan-out is not this check's concern
        result = SaveValidator().validate(_snapshot(["1", "2", "3"], [("1", "2"), ("1", "3")]))
        assert isinstance(result, Approved)

    def test_chain_approved(self, chain_snapshot):
        assert isinstance(SaveValidator().validate(chain_snapshot), Approved)

    def test_two_isolated_nodes_rejected(self):
        result = SaveValidator().validate(_snapshot(["1", "2"]))
        assert isinstance(result, Rejected)
        assert result.reason == "2 nodes have no incoming edges. Connect them before saving."

    def test_pure_cycle_has_no_roots_and_is_approved(self):
        # Shallow heuristic: zero rootless nodes is not an objection
        result = SaveValidator().validate(_snapshot(["1", "2"], [("1", "2"), ("2", "1")]))
        assert isinstance(result, Approved)


class TestRootlessNodes:
    def test_keeps_snapshot_order(self):
        snapshot = _snapshot(["c", "a", "b"], [("a", "b")])
        assert [n.id for n in rootless_nodes(snapshot)] == ["c", "a"]
