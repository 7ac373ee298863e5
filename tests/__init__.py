"""
Tests for casgraph.

This package contains tests for:
- Expression parsing, binding extraction and evaluation
- Binding reconciliation and expression node state
- The node graph, node registry and console inspection
"""
