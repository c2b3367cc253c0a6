# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Barcode Label API:
# - test_obfuscator.py: Price obfuscation formats
# - test_models.py: Request/label model validation
# - test_fonts.py: Font registration
# - test_barcode_service.py: Code128 rendering
# - test_label_renderer.py: Label composition
# - test_api.py: Endpoint integration tests
#
# Run tests with: pytest
# =============================================================================
