"""Documentation retrieval for the Adobe Express add-on SDK and Spectrum Web Components."""

__version__ = "0.1.0"
