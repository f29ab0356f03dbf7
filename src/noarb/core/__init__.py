"""
Core domain models, fixed-point primitives, and snapshot contracts.

This module contains the foundational building blocks that are independent
of the swap pipeline and of the concrete pool implementations.
"""
