"""geoqc test suite.

- unit/test_length_codec.py: length text parsing and rendering
- unit/test_type_reconcile.py: standard type vs field category rules
- unit/test_validation_engine.py: per-column verdicts and run-level failures
- unit/test_report_data.py: report aggregation
- unit/test_standards_loader.py: YAML standards, manifests, pasted rows
"""
