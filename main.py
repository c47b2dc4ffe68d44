"""
mdpreview - render Markdown files to HTML for preview.
"""

from __future__ import annotations

import argparse
import html
import json
import logging
import os
import sys
import time
from typing import List, Optional

from mdpreview.config.manager import DEFAULT_CONFIG_PATH, ConfigManager
from mdpreview.logging_utils import initLogging
from mdpreview.markdown import MarkdownParser

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_JS_URL = "https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/highlight.min.js"
DEFAULT_MERMAID_JS_URL = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
{stylesheet}<script src="{highlightJsUrl}"></script>
<script src="{mermaidJsUrl}"></script>
</head>
<body>
<article id="markdown-output">{body}</article>
<script>
if (window.hljs) {{ hljs.highlightAll(); }}
if (window.mermaid) {{
  mermaid.initialize({{ startOnLoad: false }});
  mermaid.run({{ querySelector: "#markdown-output .mermaid" }});
}}
document.querySelectorAll("figure.code-block .code-copy-btn").forEach(function (button) {{
  button.addEventListener("click", function () {{
    var figure = button.closest("figure.code-block");
    navigator.clipboard.writeText(decodeURIComponent(figure.getAttribute("data-code")));
  }});
}});
</script>
</body>
</html>
"""


class MarkdownPreview:
    """Renders Markdown documents using settings from the config file."""

    def __init__(self, configPath: str = DEFAULT_CONFIG_PATH, configDirs: Optional[List[str]] = None):
        """Initialize configuration, logging and the parser."""
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        self.previewConfig = self.configManager.getPreviewConfig()
        self.parser = MarkdownParser(self.configManager.getMarkdownOptions())

    def renderText(self, text: str, standalone: bool = False, title: str = "") -> str:
        """Render Markdown text, optionally wrapped in a full HTML page."""
        body = self.parser.parse_to_html(text)
        if not standalone:
            return body
        return self.wrapPage(body, title)

    def tokensJson(self, text: str) -> str:
        """Return the token sequence of a document as pretty JSON."""
        return json.dumps(self.parser.get_tokens_json(text), indent=2, ensure_ascii=False)

    def wrapPage(self, body: str, title: str = "") -> str:
        """Wrap rendered HTML into a page that loads highlighting and diagram scripts."""
        stylesheet = self.previewConfig.get("stylesheet", "")
        stylesheetTag = f'<link rel="stylesheet" href="{html.escape(stylesheet)}">\n' if stylesheet else ""
        return PAGE_TEMPLATE.format(
            title=html.escape(title or self.previewConfig.get("title", "Markdown Preview")),
            stylesheet=stylesheetTag,
            highlightJsUrl=html.escape(self.previewConfig.get("highlight-js-url", DEFAULT_HIGHLIGHT_JS_URL)),
            mermaidJsUrl=html.escape(self.previewConfig.get("mermaid-js-url", DEFAULT_MERMAID_JS_URL)),
            body=body,
        )

    def convert(self, inputPath: str, outputPath: Optional[str], dumpTokens: bool, standalone: bool) -> None:
        """Read one document, render it and write the result."""
        text = readInput(inputPath)
        if dumpTokens:
            result = self.tokensJson(text)
        else:
            title = "" if inputPath == "-" else os.path.basename(inputPath)
            result = self.renderText(text, standalone=standalone, title=title)
        writeOutput(outputPath, result)

    def watch(self, inputPath: str, outputPath: str, standalone: bool, interval: Optional[float] = None) -> None:
        """Re-render the whole document every time the input file changes."""
        if interval is None:
            interval = float(self.previewConfig.get("watch-interval", 0.5))

        logger.info(f"Watching {inputPath}, writing to {outputPath}")
        lastMtime: Optional[float] = None
        try:
            while True:
                try:
                    mtime = os.path.getmtime(inputPath)
                except OSError as e:
                    logger.warning(f"Can't stat {inputPath}: {e}")
                    mtime = None

                if mtime is not None and mtime != lastMtime:
                    lastMtime = mtime
                    self.convert(inputPath, outputPath, dumpTokens=False, standalone=standalone)
                    logger.info(f"Rendered {inputPath}")

                time.sleep(interval)
        except KeyboardInterrupt:
            logger.info("Watch stopped")


def readInput(inputPath: str) -> str:
    """Read Markdown source from a file or stdin ('-')."""
    if inputPath == "-":
        return sys.stdin.read()
    with open(inputPath, "r", encoding="utf-8") as f:
        return f.read()


def writeOutput(outputPath: Optional[str], content: str) -> None:
    """Write result to a file, or stdout when no path is given."""
    if outputPath is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    with open(outputPath, "w", encoding="utf-8") as f:
        f.write(content)


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="mdpreview - render Markdown to HTML for preview")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Markdown file to render, '-' for stdin (default: -)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print parsed tokens as JSON instead of HTML",
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        help="Wrap output in a complete HTML page",
    )
    parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Re-render whenever the input file changes (needs --output)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Polling interval in seconds for --watch",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)

    if args.watch and (args.input == "-" or args.output is None):
        parser.error("--watch needs an input file and --output")

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration."""
    print("=== mdpreview Configuration ===")
    print()
    try:
        print(json.dumps(configManager.config, indent=2, ensure_ascii=False, sort_keys=True))
    except (TypeError, ValueError) as e:
        # TOML datetimes are not JSON serializable
        logger.warning(f"Could not serialize config as JSON: {e}")
        for key, value in sorted(configManager.config.items()):
            print(f"{key}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArguments(argv)

    preview = MarkdownPreview(args.config, args.config_dir)

    if args.print_config:
        prettyPrintConfig(preview.configManager)
        return 0

    if args.watch:
        preview.watch(args.input, args.output, args.standalone, args.interval)
        return 0

    try:
        preview.convert(args.input, args.output, args.tokens, args.standalone)
    except OSError as e:
        logger.error(f"Failed to convert {args.input}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
