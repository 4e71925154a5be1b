"""School Dashboard backend: identity cookies and teacher-scoped directory queries."""
