import argparse
import json
from pathlib import Path

from dotenv import load_dotenv

from waste_sorter.agents.classifier import DisposalClassifier
from waste_sorter.exception import CustomException
from waste_sorter.logger import get_logger
from waste_sorter.utils.image_payload import bytes_to_data_uri
from waste_sorter.utils.load_config import load_app_config

load_dotenv()
logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Classify the item in a local image as recycle, compost or trash.")
    parser.add_argument("image_path", help="Path to a JPEG/PNG/WebP image")
    parser.add_argument("--model", default=None, help="Vision provider override (GROQ, TOGETHER, GEMINI, OPENAI)")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    args = parser.parse_args()

    image_bytes = Path(args.image_path).read_bytes()
    classifier = DisposalClassifier(config=load_app_config(args.config))

    try:
        outcome = classifier.classify(bytes_to_data_uri(image_bytes), model=args.model)
    except CustomException as e:
        logger.error("Classification failed: %s", e)
        print(json.dumps({"error": "Failed to analyze image", "message": e.message}, indent=2))
        raise SystemExit(1)

    output = outcome.result.model_dump()
    output["model"] = outcome.provider
    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
