# frz

`frz` is the engine behind a fuzzy finder for tabular data. It indexes a
directory tree into files and tags, ranks matches for a query, and streams the
best results to whoever is listening. Search tabs are contributed by plugins,
so new kinds of data can sit next to the built-in *attributes* and *files*
tabs.

## What is in the box

- **Search data** (`frz.search.data`): `SearchData` holds a context label, an
  optional root, an initial query, attribute rows and file rows. The
  `with_context`, `with_root`, `with_initial_query`, `with_attributes` and
  `with_files` methods return changed copies. `SearchData.from_filesystem(root)`
  walks a directory with `OsFs` and derives tags for every file from its parent
  directories and its extension (`*.txt`, `src`, …), counting how many files
  carry each tag. `from_filesystem_with(walker, root)` takes any object with a
  `walk(root)` method that yields relative paths.
- **Filesystem walking** (`frz.search.data.OsFs`): yields regular files under a
  root, relative to it. Hidden files are included and symbolic links are not
  followed. `.ignore` files always apply; inside a git repository `.gitignore`,
  the repository's `info/exclude` and the global git ignore file apply too.
- **Rows** (`frz.search.rows`): `AttributeRow`, `FileRow` and
  `TruncationStyle`. A `FileRow` sorts its tags and joins them into
  `display_tags`; `FileRow.filesystem(path, tags)` builds a row marked to be
  truncated from the left. `tags_for_relative_path` gives the tags for a
  relative path.
- **Matching and streaming** (`frz.search.streaming`): `match_list` scores a
  query against a list of strings using options from
  `frz.search.query_config.config_for_query`. `stream_attributes` and
  `stream_files` score items in chunks, keep the top 2,000 matches (ties go to
  the lower index), and send partial and final `SearchResult`s through a
  `SearchStream`. An empty query lists items alphabetically. A search stops
  early, returning `True`, as soon as the `QueryTracker` holds a different
  query id; it returns `False` when the `ResultChannel` has been closed.
- **Plugins** (`frz.plugins`): `PluginRegistry` keeps search tabs in the order
  they were registered, along with per-mode capabilities such as preview
  splits. Registering a mode or id twice raises `DuplicateModeError` or
  `DuplicateIdError`; a second preview split for a mode raises
  `CapabilityConflictError` — all subclasses of `PluginRegistryError`. Write
  your own tab by subclassing `SearchPlugin` and `PluginDataset`, and group
  capabilities with `PluginBundle`.
- **Previews** (`frz.preview`): `render_file` highlights a file's contents
  with line numbers as ANSI text. `ansi_to_text` turns ANSI-styled output into
  `Text`, `Line` and `Span` values with a `Style`. `FilePreviewer` renders the
  selected file on a background thread; until it is ready, `render_preview`
  returns the last finished preview or a "Loading preview for …" message.
- **Configuration** (`frz.settings`): `frz.settings.sources` cleans extension
  and header lists, lists the default config file locations and records where
  a setting came from. `frz.settings.resolved` holds `FilesystemSection`,
  `FilesystemOptions` and `ResolvedConfig`, with validation (`ConfigError` for
  zero threads or a zero maximum depth) and a readable `summary()`.
  `frz.app_dirs` gives the configuration, data and cache directories; the
  `FRZ_CONFIG_DIR`, `FRZ_DATA_DIR` and `FRZ_CACHE_DIR` environment variables
  override them.
- **Output** (`frz.output`): `print_plain`, `print_json` and
  `format_outcome_json` render a `SearchOutcome`.

## Indexing a directory

```python
from frz.search.data import SearchData

data = SearchData.from_filesystem("path/to/project")
print(len(data.files), "files")
for attribute in data.attributes:
    print(attribute.name, attribute.count)
```

## Streaming a search

```python
from frz.plugins.builtin import files
from frz.search.stream import QueryTracker, ResultChannel, SearchStream
from frz.search.streaming import stream_files

channel = ResultChannel()
tracker = QueryTracker()
query_id = tracker.increment()

stream_files(data, "main", SearchStream(channel, query_id, files.mode()), tracker)

while (result := channel.try_receive()) is not None:
    print(result.complete, [data.files[i].path for i in result.indices[:5]])
```

## Working with the plugin registry

```python
from frz.plugins.builtin.registration import register_builtin_plugins
from frz.plugins.registry import PluginRegistry

registry = PluginRegistry()
register_builtin_plugins(registry)

files_mode = registry.mode_by_id("files")
print(files_mode.id())                                # "files"
print(registry.preview_split(files_mode) is not None)  # files come with a previewer
```

## Reporting a result

```python
from frz.output import format_outcome_json
from frz.search.rows import FileRow
from frz.search.stream import SearchOutcome

outcome = SearchOutcome(
    accepted=True,
    query="main",
    selection=FileRow("src/main.rs", ["frontend"]),
)
print(format_outcome_json(outcome))
```

The JSON has `accepted`, `query` and `selection` keys. A file selection
carries `type`, `path`, `tags` and `display_tags`. An attribute selection
carries `type`, `name` and `count`. A plugin selection carries `type`, `mode`
and `index`.

## What it does not do

- There is no command-line program and no interactive terminal screen: the
  package provides the data, matching, plugin and output pieces, and the
  caller drives them.
- Configuration files are not read. `default_config_files()` only lists where
  they would be looked for; `FilesystemSection` and `ResolvedConfig` are filled
  in by the caller.
- `FilesystemOptions` describes scanning settings, but `OsFs.walk` does not
  take them: it always uses the behaviour described above.
- Plugin datasets report a key and a row count; they do not lay out or draw
  result tables.