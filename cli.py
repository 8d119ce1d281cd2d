# cli.py

import argparse
import dataclasses
import logging
import sys
import yaml
from config import SystemConfig
from core.color_similarity import color_similarity
from core.search_pipeline import SearchPipeline
from security.input_validation import InputValidator
from utils.file_utils import load_collection, save_results
from utils.logging_config import CustomLogger, setup_logging

logger = logging.getLogger("cli")

def _load_records(path: str):
    """Load and validate a collection file"""
    raw = load_collection(path)
    records = InputValidator.parse_records(raw)
    logger.info("Loaded %d of %d images from %s", len(records), len(raw), path)
    return records

def _resolve_id(records, raw_id):
    """Match a command-line id against record ids of any type"""
    if raw_id is None:
        return None
    for record in records:
        if str(record.id) == raw_id:
            return record.id
    return raw_id

def search_command(args, config: SystemConfig, app_logger: CustomLogger):
    """Filter and rank a collection from command line"""
    records = _load_records(args.collection)

    overrides = {}
    if args.top_k is not None:
        overrides['result_limit'] = args.top_k
    if args.threshold is not None:
        overrides['similarity_threshold'] = args.threshold
    if overrides:
        config.search = dataclasses.replace(config.search, **overrides)

    pipeline = SearchPipeline.from_system_config(config)
    filters = InputValidator.parse_filters({
        'text_query': args.text,
        'color': args.color,
        'similar_to': _resolve_id(records, args.similar_to),
    })

    response = pipeline.run(records, filters)

    scores = None
    if filters.similar_to is not None and response.images:
        target = next(r for r in records if r.id == filters.similar_to)
        scores = [pipeline.scorer.score(target, r) for r in response.images]

    app_logger.log_operation(
        "search",
        text_query=filters.text_query,
        color=filters.color,
        similar_to=filters.similar_to,
        matched=response.filtered_count,
        total=response.total_count
    )

    print(f"{response.filtered_count} of {response.total_count} images matched")
    for i, record in enumerate(response.images, 1):
        if scores is not None:
            print(f"{i}. {record.id} (similarity: {scores[i - 1]:.4f})")
        else:
            print(f"{i}. {record.id}")

    # Save results to JSON if requested
    if args.output:
        save_results(response.images, args.output, scores)
        print(f"\nResults saved to: {args.output}")

    return 0

def compare_command(args, config: SystemConfig, app_logger: CustomLogger):
    """Show the per-signal similarity between two images"""
    records = _load_records(args.collection)
    by_id = {str(r.id): r for r in records}

    missing = [i for i in (args.first, args.second) if i not in by_id]
    if missing:
        print(f"Error: image not found: {', '.join(missing)}", file=sys.stderr)
        return 1

    pipeline = SearchPipeline.from_system_config(config)
    breakdown = pipeline.scorer.compare(by_id[args.first], by_id[args.second])
    app_logger.log_operation(
        "compare",
        reference=args.first,
        candidate=args.second,
        composite=round(breakdown.composite, 4)
    )

    print(f"Tags:        {breakdown.tag:.4f}")
    print(f"Description: {breakdown.description:.4f}")
    print(f"Colors:      {breakdown.color:.4f}")
    print(f"Composite:   {breakdown.composite:.4f}")
    return 0

def color_command(args, config: SystemConfig, app_logger: CustomLogger):
    """Perceptual similarity between two hex colors"""
    score = color_similarity(args.first, args.second,
                             config.search.scoring.delta_e_scale)
    app_logger.log_operation("color", first=args.first, second=args.second,
                             similarity=round(score, 4))
    print(f"{score:.4f}")
    return 0

def main_cli(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Gallery Search - rank images by AI tags, description and colors"
    )
    parser.add_argument('-c', '--config', default='config.yaml',
                        help='Path to YAML configuration')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Search command
    search_parser = subparsers.add_parser('search', help='Filter and rank images')
    search_parser.add_argument('collection', help='JSON or YAML file with image records')
    search_parser.add_argument('--text', help='Text to look for in tags and descriptions')
    search_parser.add_argument('--color', help='Target color as #RRGGBB')
    search_parser.add_argument('--similar-to', help='Id of the image to find similar ones for')
    search_parser.add_argument('-k', '--top-k', type=int,
                               help='Maximum number of similar images')
    search_parser.add_argument('-t', '--threshold', type=float,
                               help='Minimum similarity for similar images')
    search_parser.add_argument('-o', '--output', help='Output JSON file for results')
    search_parser.set_defaults(func=search_command)

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Compare two images')
    compare_parser.add_argument('collection', help='JSON or YAML file with image records')
    compare_parser.add_argument('first', help='Reference image id')
    compare_parser.add_argument('second', help='Candidate image id')
    compare_parser.set_defaults(func=compare_command)

    # Color command
    color_parser = subparsers.add_parser('color', help='Compare two hex colors')
    color_parser.add_argument('first', help='First color as #RRGGBB')
    color_parser.add_argument('second', help='Second color as #RRGGBB')
    color_parser.set_defaults(func=color_command)

    # Parse arguments
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    # Execute command
    try:
        config = SystemConfig.load(args.config)
        app_logger = setup_logging(config)
        return args.func(args, config, app_logger)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main_cli())
