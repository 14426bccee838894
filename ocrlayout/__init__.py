"""OCR layout building blocks: data model, options, box statistics and text output."""

__version__ = "0.54.0"