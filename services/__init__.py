"""
services/ - Business Logic Layer
================================
Input validation and the validate-then-persist operations the front-ends call.
"""
