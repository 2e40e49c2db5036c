"""
Guard Test Suite

This package contains the false positive guard tests for the page rewriter.

Each guard test file follows the Two-Part Analysis methodology:
1. False Positive Test - Validates that the guarded text is left as written
2. False Negative Test - Ensures real rewrites still happen

Guards implemented:
- Guard 1: Acronyms that look like pronouns
- Guard 2: Non-verb words after a rewritten subject
- Guard 3: Editable regions of the page
"""
