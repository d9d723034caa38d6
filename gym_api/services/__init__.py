"""
High-level use cases for the gym directory API.

Each service module orchestrates the key-value store and the identity
provider to implement business rules (signup, member upserts, role checks).
Routers call these services instead of touching the store directly.
"""
