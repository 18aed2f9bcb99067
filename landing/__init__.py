"""
DisCor Landing Page Generator

Modules:
    models      - Derived page data (PageMeta, VehicleCompat, CompatibilityRow)
    common      - Shared utilities (config loader, settings, text, slugs, escaping)
    sources     - Product loading from JSON fixtures and input normalization
    api         - Landing products API client with pagination and retry
    rendering   - Product page, catalog, sitemap, robots and search index output
    generation  - Pipeline that writes every artifact to disk
"""
