"""Image generation adapter package.

Scope:
    Text-to-image calls against a hosted Gradio diffusion space, used by the
    dispatcher for every non-text request.

Non-goals:
    - No image download, decoding or storage; only the result URL is returned.
"""
