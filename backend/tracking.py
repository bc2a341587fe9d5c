import base64
import io
import logging
from datetime import datetime
from typing import Optional

import wandb
from PIL import Image

from backend import config
from backend.data_url import split_data_url
from backend.models import AnalysisInput, OptimizationResult

logger = logging.getLogger(__name__)


def _decode_screenshot(image: str) -> Optional[Image.Image]:
    _, payload = split_data_url(image)
    try:
        return Image.open(io.BytesIO(base64.b64decode(payload))).convert("RGB")
    except Exception as e:
        logger.warning("Could not decode screenshot for W&B: %s", e)
        return None


class InferenceTracker:
    """Log every analysis to Weights & Biases when a W&B key is configured."""

    def __init__(self, api_key: Optional[str] = None, project: Optional[str] = None) -> None:
        self.api_key = api_key if api_key is not None else config.WANDB_API_KEY
        self.project = project or config.WANDB_PROJECT
        self.enabled = False
        self._run = None

    def start(self) -> None:
        if not self.api_key:
            logger.info("WANDB_API_KEY not set. W&B tracking disabled.")
            return

        try:
            wandb.login(key=self.api_key)
            self._run = wandb.init(
                project=self.project,
                name=f"backend-{datetime.now().strftime('%Y%m%d')}",
                config={"model": config.GEMINI_MODEL, "provider": "gemini"},
            )
            self.enabled = True
            logger.info("W&B tracking enabled (project=%s)", self.project)
        except Exception as e:
            logger.warning("W&B initialization failed, continuing without tracking: %s", e)

    def log_analysis(
        self,
        analysis_input: AnalysisInput,
        duration: float,
        result: Optional[OptimizationResult] = None,
        error: Optional[str] = None,
    ) -> None:
        if not self.enabled:
            return

        try:
            log_data = {
                "category": analysis_input.category.value,
                "file_size_mb": analysis_input.file_size_mb,
                "has_image": analysis_input.image is not None,
                "inference_time_ms": duration * 1000,
                "success": result is not None,
                "timestamp": datetime.now().isoformat(),
            }

            if result is not None:
                log_data["complexity_score"] = result.complexity_score
                log_data["is_over_modeled"] = result.is_over_modeled
                log_data["num_suggestions"] = len(result.suggestions)
                log_data["num_unused_params"] = len(result.unused_params)
                log_data["num_symbolic_candidates"] = len(result.symbolic_candidates)
            else:
                log_data["error"] = error or "Unknown error"

            if analysis_input.image:
                screenshot = _decode_screenshot(analysis_input.image)
                if screenshot is not None:
                    log_data["screenshot"] = wandb.Image(
                        screenshot, caption=analysis_input.category.value
                    )

            wandb.log(log_data)
            logger.debug("Logged analysis to W&B - %.2fms", duration * 1000)
        except Exception as e:
            logger.warning("W&B logging error: %s", e)

    def finish(self) -> None:
        if self._run is not None:
            self._run.finish()
            self._run = None
        self.enabled = False
