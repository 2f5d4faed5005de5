from frz.plugins.builtin import files
from frz.plugins.descriptors import PluginSelectionContext
from frz.plugins.registry import PluginRegistry
from frz.preview import FilePreviewer
from frz.search.data import SearchData
from frz.search.rows import FileRow


def _data():
    return SearchData().with_files(
        [FileRow("src/lib.rs", ["src"]), FileRow("src/main.rs", ["src"])]
    )


def test_dataset_key():
    assert files.FileDataset().key() == files.DATASET_KEY
    assert files.descriptor().dataset.key() == "files"


def test_total_count_counts_files():
    assert files.FileDataset().total_count(_data()) == 2


def test_mode_uses_descriptor_id():
    assert files.mode().id() == "files"
    assert files.mode() == files.mode()
    assert files.FilePlugin().mode() == files.mode()


def test_selection_returns_row_copy():
    data = _data()
    plugin = files.FilePlugin()
    selected = plugin.selection(PluginSelectionContext(data), 1)
    assert selected.path == "src/main.rs"
    assert selected.tags == ["src"]
    assert selected is not data.files[1]


def test_selection_out_of_range_is_none():
    plugin = files.FilePlugin()
    assert plugin.selection(PluginSelectionContext(_data()), 5) is None
    assert plugin.selection(PluginSelectionContext(_data()), -1) is None


def test_bundle_registers_search_tab_and_preview():
    registry = PluginRegistry()
    registry.register_bundle(files.bundle())
    assert registry.contains_mode(files.mode())
    assert isinstance(registry.preview_split(files.mode()), FilePreviewer)
    assert len(list(files.bundle().capabilities())) == 2