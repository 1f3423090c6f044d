"""Tests for single-focus selection and label editing."""

from flowedit.graph import NO_SELECTION, NoSelection, Selected, SelectionController


class TestSelectionState:
    """Tests for select()/clear()."""

    def test_select_replaces_prior_selection(self):
        controller = SelectionController()
        controller.select("node-1")
        assert controller.select("node-2") == Selected("node-2")

    def test_clear_returns_no_selection(self):
        state = SelectionController().clear()
        assert isinstance(state, NoSelection)
        assert not state
        assert state is NO_SELECTION


class TestCurrentSelection:
    """Tests for current_selection() lookups."""

    def test_lookup_by_id(self, three_nodes):
        node = SelectionController().current_selection(three_nodes, Selected("node-2"))
        assert node is three_nodes[1]

    def test_no_selection(self, three_nodes):
        assert SelectionController().current_selection(three_nodes, NO_SELECTION) is None

    def test_missing_id(self, three_nodes):
        assert SelectionController().current_selection(three_nodes, Selected("node-9")) is None


class TestUpdateLabel:
    """Tests for update_label()."""

    def test_only_selected_label_changes(self, three_nodes):
        result = SelectionController().update_label(Selected("node-2"), "Updated", three_nodes)

        assert result[1].data.label == "Updated"
        assert result[1].id == three_nodes[1].id
        assert result[1].position == three_nodes[1].position
        for before, after in ((three_nodes[0], result[0]), (three_nodes[2], result[2])):
            assert after is before
            assert (after.id, after.position, after.data) == (before.id, before.position, before.data)

    def test_no_selection_returns_input(self, three_nodes):
        result = SelectionController().update_label(NO_SELECTION, "Updated", three_nodes)
        assert result is three_nodes

    def test_empty_label_allowed(self, three_nodes):
        result = SelectionController().update_label(Selected("node-1"), "", three_nodes)
        assert result[0].label == ""
