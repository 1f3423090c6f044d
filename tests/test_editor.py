"""Tests for FlowEditor command routing and state ownership."""

import pytest

from flowedit.config import EditorConfig
from flowedit.editor import (
    ClearFocus,
    Connect,
    Drop,
    EdgeChanges,
    EditLabel,
    FlowEditor,
    Focus,
    NodeChanges,
    Save,
    UnknownCommandError,
)
from flowedit.graph import (
    Accept,
    Approved,
    Bounds,
    Connection,
    NO_SELECTION,
    PersistError,
    Position,
    Reject,
    Rejected,
    Selected,
    Snapshot,
    Viewport,
)
from flowedit.graph.changes import EdgeRemove, NodeAdd, NodePosition, NodeRemove, NodeSelect
from flowedit.persistence import MemorySink
from graph_test_helpers import make_node


class TestDrop:
    """Node creation from dropped templates."""

    def test_drop_creates_node_at_mapped_position(self, editor, drop):
        node = drop(120, 80)

        assert node is not None
        assert node.id == "node-1"
        assert node.kind == "textUpdater"
        assert node.position == Position(100, 20)
        assert node.label == "Message Node"
        assert editor.snapshot.nodes == (node,)

    def test_ids_unique_and_increasing(self, editor, drop):
        nodes = [drop(100 + i, 100) for i in range(12)]
        ids = [n.id for n in nodes]

        assert len(set(ids)) == 12
        sequence = [editor.ids.sequence_of(i) for i in ids]
        assert all(a < b for a, b in zip(sequence, sequence[1:]))

    def test_ids_not_reused_after_removal(self, editor, drop):
        drop()
        second = drop()
        editor.on_node_change([NodeRemove(second.id)])
        assert drop().id == "node-3"

    def test_unknown_payload_is_noop(self, editor, canvas_bounds):
        assert editor.on_drop("chart", Position(1, 1), canvas_bounds) is None
        assert editor.snapshot == Snapshot()
        assert not editor.is_dirty()

    def test_missing_bounds_is_noop(self, editor):
        assert editor.on_drop("textUpdater", Position(1, 1), None) is None
        assert editor.ids.peek() == "node-1"

    def test_drop_respects_viewport(self, drop):
        node = drop(120, 80, viewport=Viewport(x=10, y=10, zoom=2))
        assert node.position == Position(45, 5)

    def test_configured_label_and_prefix(self, canvas_bounds):
        editor = FlowEditor(
            config=EditorConfig(node_types=["msg"], default_label="Say hi", id_prefix="m")
        )
        node = editor.on_drop("msg", Position(20, 60), canvas_bounds)
        assert (node.id, node.label) == ("m1", "Say hi")

    def test_allocator_continues_after_initial_snapshot(self, canvas_bounds):
        editor = FlowEditor(snapshot=Snapshot(nodes=(make_node("node-4"), make_node("node-9"))))
        assert editor.on_drop("textUpdater", Position(20, 60), canvas_bounds).id == "node-10"

    def test_drop_after_node_added_by_change(self, editor, canvas_bounds):
        editor.on_node_change([NodeAdd(make_node("node-1"))])
        node = editor.on_drop("textUpdater", Position(20, 60), canvas_bounds)

        assert node.id == "node-2"
        assert [n.id for n in editor.snapshot.nodes] == ["node-1", "node-2"]


class TestConnect:
    """Connection attempts routed through the policy."""

    def test_accepted_edge_is_added(self, editor, drop):
        a, b = drop(), drop()
        decision = editor.on_connect_attempt(Connection(a.id, b.id))

        assert isinstance(decision, Accept)
        assert editor.snapshot.edges == (decision.edge,)

    def test_second_outgoing_edge_leaves_edges_unchanged(self, editor, drop):
        a, b, c = drop(), drop(), drop()
        editor.on_connect_attempt(Connection(a.id, b.id))
        before = editor.snapshot.edges

        decision = editor.on_connect_attempt(Connection(a.id, c.id))

        assert isinstance(decision, Reject)
        assert editor.snapshot.edges == before
        assert len(editor.snapshot.edges) == 1

    def test_connect_to_missing_node_rejected(self, editor, drop):
        a = drop()
        assert isinstance(editor.on_connect_attempt(Connection(a.id, "node-77")), Reject)
        assert editor.snapshot.edges == ()


class TestNodeChanges:
    """Drag, selection-flag and removal change sets."""

    def test_drag_updates_position(self, editor, drop):
        node = drop()
        editor.on_node_change([NodePosition(node.id, Position(300, 300), dragging=True)])
        assert editor.snapshot.find_node(node.id).position == Position(300, 300)

    def test_remove_prunes_edges(self, editor, drop):
        a, b = drop(), drop()
        editor.on_connect_attempt(Connection(a.id, b.id))
        editor.on_node_change([NodeRemove(b.id)])

        assert editor.snapshot.edges == ()
        assert [n.id for n in editor.snapshot.nodes] == [a.id]

    def test_removing_focused_node_clears_focus(self, editor, drop):
        node = drop()
        editor.on_node_focus(node.id)
        editor.on_node_change([NodeRemove(node.id)])
        assert editor.selection is NO_SELECTION

    def test_select_flag_does_not_mark_dirty(self, three_nodes):
        editor = FlowEditor(snapshot=Snapshot(nodes=three_nodes))
        editor.on_node_change([NodeSelect("node-1", True)])
        assert editor.snapshot.nodes[0].selected
        assert not editor.is_dirty()

    def test_edge_removal(self, editor, drop):
        a, b = drop(), drop()
        edge = editor.on_connect_attempt(Connection(a.id, b.id)).edge
        editor.on_edge_change([EdgeRemove(edge.id)])
        assert editor.snapshot.edges == ()


class TestFocusAndLabel:
    """Selection and label editing."""

    def test_label_edit_changes_only_focused_node(self, editor, drop):
        a, b, c = drop(100, 100), drop(200, 100), drop(300, 100)
        editor.on_node_focus(b.id)

        editor.on_label_edit("Welcome!")

        nodes = editor.snapshot.nodes
        assert nodes[1].data.label == "Welcome!"
        assert nodes[0] == a
        assert nodes[2] == c
        assert editor.selected_node() is nodes[1]

    def test_label_edit_without_focus_is_noop(self, editor, drop):
        drop()
        before = editor.snapshot
        assert editor.on_label_edit("ignored") is before

    def test_focus_replaces_and_clear_unsets(self, editor, drop):
        a, b = drop(), drop()
        editor.on_node_focus(a.id)
        assert editor.on_node_focus(b.id) == Selected(b.id)
        editor.on_focus_clear()
        assert editor.selected_node() is None


class TestSave:
    """Save validation and hand-off to the sink."""

    def test_single_node_saves(self, editor, drop, sink):
        drop()
        result = editor.on_save_requested()

        assert isinstance(result, Approved)
        assert sink.last == editor.snapshot
        assert not editor.is_dirty()

    def test_disconnected_graph_rejected_and_state_kept(self, editor, drop, sink):
        for _ in range(3):
            drop()
        before = editor.snapshot

        result = editor.on_save_requested()

        assert isinstance(result, Rejected)
        assert result.reason.startswith("3 nodes have no incoming edges")
        assert editor.snapshot is before
        assert editor.is_dirty()
        assert sink.saved == []

    def test_retry_after_connecting_succeeds(self, editor, drop, sink):
        a, b = drop(), drop()
        assert isinstance(editor.on_save_requested(), Rejected)
        editor.on_connect_attempt(Connection(a.id, b.id))
        assert isinstance(editor.on_save_requested(), Approved)
        assert len(sink.saved) == 1

    def test_sink_failure_propagates(self):
        editor = FlowEditor(sink=MemorySink(fail_with="disk full"))
        editor.on_drop("textUpdater", Position(0, 0), Bounds(0, 0))

        with pytest.raises(PersistError, match="disk full"):
            editor.on_save_requested()
        assert editor.is_dirty()


class TestDispatch:
    """Typed command dispatch."""

    def test_full_session(self, editor, sink, canvas_bounds):
        a = editor.dispatch(Drop("textUpdater", Position(120, 80), canvas_bounds))
        b = editor.dispatch(Drop("textUpdater", Position(320, 80), canvas_bounds))
        assert isinstance(editor.dispatch(Connect(a.id, b.id)), Accept)
        editor.dispatch(Focus(b.id))
        editor.dispatch(EditLabel("Thanks"))
        editor.dispatch(ClearFocus())
        editor.dispatch(NodeChanges([NodePosition(a.id, Position(0, 0))]))
        editor.dispatch(EdgeChanges([]))

        assert isinstance(editor.dispatch(Save()), Approved)
        saved = sink.last
        assert saved.find_node(b.id).label == "Thanks"
        assert saved.find_node(a.id).position == Position(0, 0)

    def test_unknown_command(self, editor):
        with pytest.raises(UnknownCommandError):
            editor.dispatch(object())

    def test_mutation_log_records_operations(self, editor, drop):
        a, b = drop(), drop()
        editor.on_connect_attempt(Connection(a.id, b.id))
        ops = [e.operation for e in editor.mutation_log.iter_entries()]
        assert ops == ["add_node", "add_node", "connect"]
