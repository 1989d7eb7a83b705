"""site-audit: score a website repository for performance, code, SEO, accessibility and security."""

__version__ = "0.1.0"
