"""bulkctl - group a stream of commands into bulks and fan them out to sinks."""

__version__ = "1.0.0"
