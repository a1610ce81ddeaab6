"""API adapter package.

Architectural role:
- Defines the external interaction boundary: the HTTP dispatcher endpoint
  (`http_api`), its server entrypoint (`main`) and the terminal front-end
  (`cli`).
- Performs transport-level validation and response shaping.
- Delegates backend selection to `app.core.dispatcher`.
"""
