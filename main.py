import argparse
import json
import logging
import os
import sys

from core.app_context import AppContext
from core.config_loader import CONFIG_PATH_ENV, load_config
from core.exceptions import IngestionError

logger = logging.getLogger(__name__)


def run_ingest(ctx: AppContext, pdf_path: str) -> int:
    """Ingest one PDF from disk and print the upload result as JSON."""
    logger.info(f"Ingesting {pdf_path}")
    try:
        with open(pdf_path, 'rb') as f:
            content = f.read()
    except OSError as e:
        logger.error(f"Cannot read {pdf_path}: {e}")
        return 1

    try:
        result = ctx.pipeline.submit(content, ctx.config.ingestion.accepted_content_type)
    except IngestionError as e:
        logger.error(f"Ingestion failed: {e}")
        return 1

    output = {
        "uploaded": result.uploaded,
        "fileName": result.raw_key,
        "bucket": result.bucket,
        "txtFileName": result.parsed_key,
        "stages": [stage.value for stage in result.stages],
    }
    print(json.dumps(output, indent=2))
    return 0


def run_candidates(ctx: AppContext) -> int:
    """Print every parsed candidate record as JSON."""
    try:
        records = ctx.catalog.list_all()
    except IngestionError as e:
        logger.error(f"Listing candidates failed: {e}")
        return 1

    output = [
        {
            "name": record.name,
            "fileName": record.file_name,
            "status": record.status,
            "error": record.error,
        }
        for record in records
    ]
    print(json.dumps(output, indent=2))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Resume Ingestion Service")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('serve', help='Run the HTTP API')

    ingest_parser = subparsers.add_parser('ingest', help='Ingest a PDF resume from disk')
    ingest_parser.add_argument('pdf', type=str, help='Path to the PDF file')

    subparsers.add_parser('candidates', help='List parsed candidates')

    args = parser.parse_args(argv)

    if args.command == 'serve':
        os.environ[CONFIG_PATH_ENV] = args.config
        from web.backend.app import main as serve
        serve()
        return 0

    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level,
        format=config.logging.format
    )
    ctx = AppContext.build(config)

    if args.command == 'ingest':
        return run_ingest(ctx, args.pdf)
    return run_candidates(ctx)


if __name__ == "__main__":
    sys.exit(main())
