"""split-every test suite.

Test organization:
- unit/test_matchers.py: pattern matchers and UTF-8 widths
- unit/test_chunker.py: splitting randomly-accessible sources
- unit/test_pull.py: splitting pull-based sources
- unit/test_api.py: construction entry points and type dispatch
- unit/test_config_loader.py, unit/test_env.py: declarative configuration
- unit/test_errors.py, unit/test_logging.py: ambient error and logging support
- unit/test_cli.py: the split-every command
"""
