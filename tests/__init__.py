"""
Test suite for the Python client.

Test Organization:
- test_client.py - unit tests that need no server
- integration/ - the client driven against the in-process API
- App-specific tests remain in their respective app directories (e.g., accounts/tests.py)
"""
