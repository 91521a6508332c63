import re
import json
import logging
from typing import Any, Dict, List, Optional, Type

from mistralai import Mistral
from pydantic import BaseModel, Field
from langchain_core.tools import BaseTool

from tools.recipe_schema import RecipeData
from utils.supabase_utils import get_mistral_api_key, get_vision_model

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a recipe digitizer. Extract text verbatim. "
    "If the recipe spans multiple images, stitch them together logically. "
    'Return JSON: { "title": string, "description": string, '
    '"ingredients": string[], "instructions": string[] }'
)

USER_INSTRUCTION = (
    "These images are parts of a SINGLE recipe. Combine the text from all images "
    "into one structured recipe. Ignore duplicates or overlapping text."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def as_data_url(image: str) -> str:
    """Raw base64 gets a JPEG data URL prefix; data: and http(s) URLs pass through."""
    if image.startswith(("data:", "http://", "https://")):
        return image
    return f"data:image/jpeg;base64,{image}"


def build_messages(images: List[str]) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = [{"type": "text", "text": USER_INSTRUCTION}]
    for img in images:
        content.append({"type": "image_url", "image_url": as_data_url(img)})
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]


def _message_text(content: Any) -> str:
    # content is a str, or a list of chunks on newer models
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(getattr(c, "text", "") or "" for c in content)


def parse_recipe_json(text: str) -> Dict[str, Any]:
    """Parse the model's reply into the RecipeData shape."""
    raw = text.strip()
    m = _FENCE_RE.match(raw)
    if m:
        raw = m.group(1)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"AI returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("AI returned JSON that is not an object")
    return RecipeData.model_validate(data).model_dump()


def process_recipe(
    images: List[str],
    client: Optional[Mistral] = None,
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """Send every image of one recipe in a single vision request and return the structured recipe."""
    if not images:
        raise ValueError("No images provided")

    client = client or Mistral(api_key=get_mistral_api_key())
    model = model or get_vision_model()
    logger.info("Digitizing recipe from %d image(s) with %s", len(images), model)

    resp = client.chat.complete(
        model=model,
        messages=build_messages(images),
        response_format={"type": "json_object"},
    )

    text = _message_text(resp.choices[0].message.content)
    if not text.strip():
        raise RuntimeError("No content returned from AI")
    return parse_recipe_json(text)


class ProcessRecipeInput(BaseModel):
    images: List[str] = Field(description="Base64 images or data URLs, all parts of one recipe, in order.")


class ProcessRecipeTool(BaseTool):
    name: str = "process_recipe"
    description: str = (
        "Takes the images of a single paper recipe (photos or scanned pages), "
        "reads them with a vision model and returns the structured recipe."
    )
    args_schema: Type[BaseModel] = ProcessRecipeInput

    def _run(self, images: List[str]) -> dict:
        return process_recipe(images)

    async def _arun(self, images: List[str]) -> dict:
        return self._run(images)
