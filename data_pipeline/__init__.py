"""
Data pipeline package for downloading, caching and serving raw asset series
to the time-series core.

Modules:
- downloader: Fetch daily closes from providers (yfinance) and sanitize them
- cache: Read-through series cache with one in-flight load per asset, and
  last-write-wins selection tracking
- export: Delimited text export of cached raw series
- data_service: Facade used by app code (chart rows, correlation, export)
- scheduler: Optional daily cache refresh (16:15 scheduler time)
"""
