import os
import threading
from contextlib import contextmanager
from pathlib import Path

from .config import StorageConfig
from .errors import GraphError, XMLGraphError
from .logger import configure_logging, get_logger
from .xml_graph import read_document, write_document

logger = get_logger("store")


class GraphStore:
    """A graph persisted to an XML file, with an explicit open/close lifecycle.

    ``open()`` loads the file into the graph (or starts empty when the file
    does not exist yet), ``save()`` writes the graph back, and ``close()``
    saves once more unless the store is read only. The store is also a
    context manager doing ``open()``/``close()``.

    The graph itself is not thread safe. Loading, saving and any sequence
    of mutations wrapped in ``transaction()`` hold the store's lock, so
    threads that only touch the graph through ``transaction()`` are
    serialized.
    """

    def __init__(self, path, graph, config=None):
        if not (hasattr(graph, "read") and hasattr(graph, "write")):
            raise TypeError(f"{type(graph).__name__} cannot be read from or written to XML.")
        self.path = Path(path)
        self.graph = graph
        self.config = config or StorageConfig()
        self._lock = threading.RLock()
        self._open = False

    @property
    def is_open(self):
        return self._open

    def _check_open(self):
        if not self._open:
            raise GraphError(f"Graph store {self.path} is not open.")

    def open(self):
        with self._lock:
            if self._open:
                raise GraphError(f"Graph store {self.path} is already open.")
            configure_logging(self.config.log_level, self.config.log_file)
            if self.path.exists():
                self._load()
            else:
                self.graph.clear()
                logger.info("[STORE] No graph file at %s, starting empty.", self.path)
            self._open = True
        return self

    def _load(self):
        try:
            with self.path.open("rb") as f:
                read_document(f, self.graph)
        except XMLGraphError as exc:
            logger.error("[STORE] Failed to read graph file %s: %s", self.path, exc)
            raise
        logger.info("[STORE] Loaded %d mappings from %s", self.graph.size(), self.path)

    def reload(self):
        """Discard in-memory changes and read the file again."""
        with self._lock:
            self._check_open()
            if self.path.exists():
                self._load()
            else:
                self.graph.clear()

    def save(self):
        with self._lock:
            self._check_open()
            if self.config.read_only:
                raise GraphError(f"Graph store {self.path} is read only.")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            try:
                with tmp_path.open("wb") as f:
                    write_document(f, self.graph, encoding=self.config.encoding,
                                   indent=self.config.indent)
                os.replace(tmp_path, self.path)
            except BaseException:
                tmp_path.unlink(missing_ok=True)
                raise
            logger.debug("[STORE] Saved %d mappings to %s", self.graph.size(), self.path)

    def close(self):
        with self._lock:
            if not self._open:
                return
            if not self.config.read_only:
                self.save()
            self._open = False
            logger.debug("[STORE] Closed %s", self.path)

    @contextmanager
    def transaction(self):
        """Hold the store lock while the caller works on the graph."""
        with self._lock:
            self._check_open()
            yield self.graph

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
