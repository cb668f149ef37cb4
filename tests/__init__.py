"""
Registration Suite Test Suite

Test categories:
- test_loader.py - Fixture store and scenario lookup
- test_config.py - Run configuration and pytest arguments
- test_server.py - Dependent web server management
- test_artifacts.py - Screenshots, videos and traces
- test_registration_page.py - Page object against a mocked page
- test_cli.py - registration-e2e command
- test_harness.py - --e2e gate, fixture and server aborts, server ownership, context fixture
- e2e/ - Browser scenarios (need --e2e and a running application)
"""
