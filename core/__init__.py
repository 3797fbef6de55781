"""
Pure time-series core for the dashboard.

Modules:
- aligner: merge named series onto a shared date axis with forward fill
- downsampler: weekly/monthly bucket averaging
- normalizer: min-max and fixed-domain rescaling for charts
- correlation: windowed Pearson correlation between two series
- window: viewport index arithmetic (zoom/pan)
"""
