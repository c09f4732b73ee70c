"""
Blueprint package — one sub-package per URL area.

  - main  -> health check
  - auth  -> token inspection and the development token endpoint
  - admin -> service triage and user management
"""
