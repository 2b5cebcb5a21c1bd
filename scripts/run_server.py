#!/usr/bin/env python3
"""
Run the work log API with uvicorn.
"""

import argparse
import logging

import uvicorn

from worklog.core.config import HOST, PORT, debug_enabled, validate_config

logging.basicConfig(level=logging.INFO)


def main():
    parser = argparse.ArgumentParser(description='Serve the work log API')
    parser.add_argument('--host', default=HOST,
                        help=f'Interface to bind (default: {HOST})')
    parser.add_argument('--port', type=int, default=PORT,
                        help=f'Port to listen on (default: {PORT})')
    parser.add_argument('--reload', action='store_true',
                        help='Restart on code changes (development only)')
    args = parser.parse_args()

    issues = validate_config()
    for issue in issues:
        logging.warning(f"Configuration issue: {issue}")

    logging.info(f"Starting work log API on {args.host}:{args.port}...")
    uvicorn.run(
        "worklog.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if debug_enabled() else "info",
    )


if __name__ == '__main__':
    main()
