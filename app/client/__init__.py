"""Interaction-surface package.

Architectural role:
    Client-side counterpart of the dispatcher: holds the per-view session
    state, talks to the dispatcher over HTTP and prepares results for display.

Module split:
    - `transport`: HTTP call to the dispatcher endpoint.
    - `session`: prompt/history/mode/loading/error/reasoning state and the
      submission protocol.
    - `render`: text normalization and per-mode display classification.
"""
