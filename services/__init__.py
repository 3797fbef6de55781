"""Request extraction, validation, orchestration, charts and LLM glue."""
