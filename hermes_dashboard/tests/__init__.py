'''
HERMES Dashboard Test Suite

Test Modules:
-------------
- test_metrics.py: Derived-Metrics Engine
  - Totals, averages, empty-series behavior
  - Trailing revenue window and weekday labels
  - Segment shares and render-time percentages
  - Active campaign counting, insight feed ranking

- test_loaders.py: Sources and loaders
  - LoaderState transitions
  - LoadFailure and unexpected-error containment
  - Record validation, synthetic generator, catalogs

- test_assembler.py: Readiness Coordinator and View Model Assembler
  - ready/errors semantics, safe defaults, partial results

- test_session.py: Session lifecycle
  - Any settlement order, monotonic readiness, teardown, concurrency

- test_api.py: FastAPI surface
- test_config.py: Settings loading

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Test Dependencies:
------------------
- pytest
- pytest-asyncio
- httpx (fastapi.testclient)
'''

__all__ = []
