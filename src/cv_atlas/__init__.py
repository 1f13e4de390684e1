"""CV Atlas - multi-provider LLM orchestration for CV extraction."""

__version__ = "0.1.0"
