"""
Main entrypoint for the canvas engine.
"""
import sys
from config import DEFAULT_GRID_SIZE, HISTORY_LIMIT
from main_loop import CanvasSession
from ui.cli import CLIInterface
from utils.logger import setup_logger

# Setup logging
logger = setup_logger()


def main():
    """Main entry point."""
    logger.info("=" * 60)
    logger.info("Prompt Canvas Starting")
    logger.info(f"Grid: {DEFAULT_GRID_SIZE}x{DEFAULT_GRID_SIZE}")
    logger.info(f"History limit: {HISTORY_LIMIT or 'unbounded'}")
    logger.info("=" * 60)

    try:
        cli = CLIInterface()
        session = CanvasSession(on_render=cli.on_render, on_report=cli.display)
        logger.info("Canvas session initialized")

        session.run_interactive_loop(
            input_handler=cli.get_input,
            output_handler=cli.display,
            special_command_handler=cli.handle_special_command
        )

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\n\nInterrupted. Goodbye!")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(f"\nFATAL ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
