"""CLI for compiling candidate news articles."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from compile_news.compile_news import compile_news_articles
from compile_news.config import load_config, set_config
from compile_news.helpers import candidates_from_args, parse_compile_news_args
from compile_news.store.sinks import ArticleSink, JsonlArticleSink, S3ArticleSink

load_dotenv()

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_compile_news_args(argv)
    setup_logging(verbose=args.verbose)

    config = load_config(args.config)
    set_config(config)

    candidates = candidates_from_args(args)
    if not candidates:
        logger.warning("No candidates to compile news articles for")
        return

    sinks: list[ArticleSink] = []
    if args.load_local:
        sinks.append(JsonlArticleSink.for_run(config.storage.output_dir))
    if args.load_s3:
        sinks.append(S3ArticleSink(os.environ["S3_BUCKET_NAME"], config.storage.s3_prefix))
    if not sinks:
        logger.warning("No output selected; articles will be compiled but not stored")

    summaries = compile_news_articles(candidates, config, sinks=sinks)
    stored = sum(summary.stored for summary in summaries)
    logger.info("Stored %d articles for %d candidates", stored, len(candidates))


if __name__ == "__main__":
    main()
