"""Pipeline stage components.

- DirectoryScanner: walks the search root and feeds file paths
- FileReaderPool: reads files into per-line results
- LineMatcherPool: applies the pattern to each line
- ResultSink: hands results to the output writer
"""

from findstr.core.pipeline.components.matcher import LineMatcherPool, LineMatcherWorker, match_line
from findstr.core.pipeline.components.reader import FileReader, FileReaderPool, FileReaderWorker
from findstr.core.pipeline.components.scanner import DirectoryScanner
from findstr.core.pipeline.components.sink import ResultSink

__all__ = [
    "DirectoryScanner",
    "FileReader",
    "FileReaderPool",
    "FileReaderWorker",
    "LineMatcherPool",
    "LineMatcherWorker",
    "ResultSink",
    "match_line",
]
