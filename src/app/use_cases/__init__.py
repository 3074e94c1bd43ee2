"""
Use Cases

Organized into domain folders:
- auth/: Authentication and password reset flows
- users/: Authenticated user operations
- admin/: System administration
"""
