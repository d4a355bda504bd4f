"""I/O tools: readers of event inputs and writers of selection outputs."""

from .factories import reader_factory, writer_factory
