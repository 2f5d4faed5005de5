import pytest

from frz.plugins.descriptors import (
    CapabilityConflictError,
    DuplicateIdError,
    DuplicateModeError,
    PluginDataset,
    PluginDescriptor,
    PluginQueryContext,
    PluginRegistryError,
    PluginSelectionContext,
    PluginUiDefinition,
    SearchMode,
)


class NullDataset(PluginDataset):
    def key(self):
        return "test"

    def total_count(self, data):
        return len(data)


def make_descriptor(plugin_id):
    return PluginDescriptor(
        id=plugin_id,
        ui=PluginUiDefinition(
            tab_label="Test",
            mode_title="Test Mode",
            hint="",
            table_title="",
            count_label="",
        ),
        dataset=NullDataset(),
    )


def test_dataset_is_abstract():
    with pytest.raises(TypeError):
        PluginDataset()


def test_dataset_reached_through_mode():
    mode = SearchMode(make_descriptor("counted"))
    dataset = mode.descriptor.dataset
    assert dataset.key() == "test"
    assert dataset.total_count([1, 2]) == 2
    assert mode.descriptor.ui.mode_title == "Test Mode"


def test_mode_id_comes_from_descriptor():
    descriptor = make_descriptor("files")
    mode = SearchMode(descriptor)
    assert mode.id() == "files"
    assert mode.descriptor is descriptor


def test_modes_compare_by_descriptor_identity():
    first = make_descriptor("same")
    second = make_descriptor("same")
    assert SearchMode(first) == SearchMode(first)
    assert not SearchMode(first) == SearchMode(second)


def test_modes_are_usable_as_dict_keys():
    descriptor = make_descriptor("agg")
    table = {SearchMode(descriptor): 1}
    assert table[SearchMode(descriptor)] == 1
    assert SearchMode(make_descriptor("agg")) not in table


def test_duplicate_id_error_message():
    error = DuplicateIdError("test")
    assert isinstance(error, PluginRegistryError)
    assert error.id == "test"
    assert str(error) == "plugin id 'test' is already registered"


def test_duplicate_mode_error_mentions_mode():
    mode = SearchMode(make_descriptor("alt"))
    error = DuplicateModeError(mode)
    assert error.mode == mode
    assert "alt" in str(error)
    assert str(error).endswith("is already registered")


def test_capability_conflict_error():
    mode = SearchMode(make_descriptor("test"))
    error = CapabilityConflictError("preview split", mode)
    assert error.capability == "preview split"
    assert str(error).startswith("preview split capability for mode")
    with pytest.raises(PluginRegistryError):
        raise error


def test_query_context_builds_selection_context():
    data = object()
    tracker = object()
    context = PluginQueryContext(data, tracker)
    selection = context.selection_context()
    assert isinstance(selection, PluginSelectionContext)
    assert selection.data is data
    assert context.latest_query_id is tracker