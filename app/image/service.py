"""Image backend used by the dispatcher.

Role in pipeline:
    - Receives the prompt from `app.core.dispatcher`.
    - Sends it to the configured diffusion space with the fixed
      `ImageParameters`.
    - Returns the first result item's URL, or `None` when there is none.

Size validation:
    None. Width/height/steps are configuration constants, never request input.

Error handling strategy:
    Exceptions from `app.image.client` are intentionally propagated.
"""

from app.image.client import first_result_url, predict
from app.llm.provider_config import IMAGE_PARAMETERS, ImageParameters, Settings


def build_inputs(prompt: str, parameters: ImageParameters) -> list:
    """Positional inputs in the order the `/infer` endpoint declares them."""
    return [
        prompt,
        parameters.seed,
        parameters.randomize_seed,
        parameters.width,
        parameters.height,
        parameters.guidance_scale,
        parameters.num_inference_steps,
    ]


class GradioImageBackend:
    """Image backend backed by a hosted Gradio diffusion space."""

    def __init__(self, settings: Settings, parameters: ImageParameters = IMAGE_PARAMETERS):
        self.settings = settings
        self.parameters = parameters

    def generate_image(self, prompt: str) -> str | None:
        output = predict(
            self.settings.image_space,
            self.settings.image_endpoint,
            build_inputs(prompt, self.parameters),
            token=self.settings.hf_token,
            timeout=self.settings.image_timeout_seconds,
        )
        return first_result_url(output)
