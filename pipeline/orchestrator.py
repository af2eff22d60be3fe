"""
Batch orchestration for the release title parser.

Parse calls share no mutable state, so a batch is fanned out over a thread
pool with no locking. Results come back in input order; a failed parse is a
``None`` in its slot and is never retried.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from filesystem.file_ops import discover_media_files
from parsing.engine import TitleParser
from parsing.patterns import build_tables
from utils.logging_config import log_processing_progress

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class BatchParser:
    """Runs a ``TitleParser`` over many titles or paths concurrently."""

    def __init__(self, config: Dict[str, Any], parser: Optional[TitleParser] = None):
        """
        Args:
            config: Configuration dictionary from ``load_config``
            parser: Parser to use; built from ``config`` when omitted
        """
        self.config = config
        self.max_workers = config['concurrency']['max_workers']
        self.parser = parser or TitleParser(tables=build_tables(config))

        self.stats = {
            'parsed': 0,
            'unparsed': 0,
            'processing_time_total': 0.0
        }

    def parse_album_titles(self, titles: Sequence[str]) -> list:
        return self._run(self.parser.parse_album_title, titles)

    def parse_music_titles(self, titles: Sequence[str]) -> list:
        return self._run(self.parser.parse_music_title, titles)

    def parse_release_groups(self, titles: Sequence[str]) -> list:
        return self._run(self.parser.parse_release_group, titles)

    def parse_paths(self, paths: Sequence[Path]) -> list:
        return self._run(self.parser.parse_music_path, paths)

    def parse_directory(self, root_dir: Path, recursive: bool = True) -> Dict[Path, Any]:
        """
        Parse every media file below a directory.

        Raises:
            FilesystemError: If the directory cannot be scanned
        """
        extensions = self.config['parser']['media_extensions']
        paths = list(discover_media_files(root_dir, extensions, recursive))
        logger.info(f"Found {len(paths)} media files in {root_dir}")

        return dict(zip(paths, self.parse_paths(paths)))

    def _run(self, func: Callable[[T], R], items: Sequence[T]) -> List[Optional[R]]:
        total = len(items)
        results: List[Optional[R]] = [None] * total
        if total == 0:
            return results

        start_time = time.time()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(func, item): index for index, item in enumerate(items)}

            for completed, future in enumerate(as_completed(futures), 1):
                index = futures[future]
                results[index] = future.result()

                if results[index] is None:
                    self.stats['unparsed'] += 1
                else:
                    self.stats['parsed'] += 1

                log_processing_progress(completed, total, logger)

        duration = time.time() - start_time
        self.stats['processing_time_total'] += duration
        logger.info(f"Batch of {total} finished in {duration:.2f}s "
                    f"({self.stats['parsed']} parsed, {self.stats['unparsed']} unparsed so far)")

        return results
