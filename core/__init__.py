"""
UGC Intake - Core Business Logic

This package holds everything with real decisions in it:
1. File persistence (collision-free names, one write per upload)
2. Intake validation (required fields, consent, date sanity)
3. Record lifecycle (create, read, full-replace update, delete)
4. Dashboard queries (per-business listing, newest first)

HTTP routing and configuration live outside it, in `web` and `utils`.
"""
