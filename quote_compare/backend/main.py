#!/usr/bin/env python3
"""
Main application runner for the QuoteCompare API.
"""

import sys
import argparse
import logging


def setup_logging(debug: bool = False, log_file: str = 'app.log'):
    """Setup consistent logging format"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def reset_config_if_requested(args, config_manager):
    """Reset configuration if --reset-config flag is provided"""
    if not args.reset_config:
        return

    logging.info(f"Resetting configuration at {config_manager.config_file}")
    if not config_manager.reset_to_defaults():
        logging.error("Could not reset configuration")
        sys.exit(1)


def main():
    """Main application entry point"""
    parser = argparse.ArgumentParser(description='QuoteCompare - BOQ vendor quotation comparison API')
    parser.add_argument('--config', type=str, default=None, help='Path to the JSON configuration file')
    parser.add_argument('--reset-config', action='store_true', help='Reset configuration to defaults before running')
    parser.add_argument('--port', type=int, default=3001, help='Port to run the server on')
    parser.add_argument('--host', type=str, default='localhost', help='Host to run the server on')
    parser.add_argument('--log-file', type=str, default='app.log', help='Log file path')
    parser.add_argument('--debug', action='store_true', help='Run in debug mode')

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.debug, args.log_file)

    from quote_compare.backend.app import App
    from quote_compare.config import ConfigManager

    config_manager = ConfigManager(args.config)
    reset_config_if_requested(args, config_manager)

    server = App(config_manager)

    logging.info(f"Starting QuoteCompare on http://{args.host}:{args.port}")
    logging.info("Endpoints: /api/comparison, /api/match, /api/approval, /api/kpi, /api/erp, /api/export, /api/config")
    server.app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
