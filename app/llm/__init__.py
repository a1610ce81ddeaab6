"""Text-generation access package.

Module split:
    - `provider_config`: environment-driven settings for every backend.
    - `service`: prompt-to-payload adapter implementing the text backend.
    - `client`: HTTP transport to the OpenAI-compatible gateway.
"""
