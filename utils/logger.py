"""
Enhanced logging with rich formatting and colorlog.
Provides Spring Boot-style logging with readable terminal output.
"""

import logging
import sys
import uuid
from pathlib import Path
from typing import Optional

import colorlog
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Global console for rich output
console = Console()

# Request ID context for correlation
_request_context = {}


def get_request_id() -> str:
    """Get or create request ID for current context."""
    if "request_id" not in _request_context:
        _request_context["request_id"] = str(uuid.uuid4())[:8]
    return _request_context["request_id"]


def set_request_id(request_id: str):
    """Set request ID for current context."""
    _request_context["request_id"] = request_id


def new_request_id() -> str:
    """Start a fresh correlation id, one per generation attempt."""
    request_id = str(uuid.uuid4())[:8]
    set_request_id(request_id)
    return request_id


def clear_request_id():
    """Clear request ID from context."""
    _request_context.clear()


class ContextFilter(logging.Filter):
    """Add request ID and component name to log records."""

    def __init__(self, component: str = "SYSTEM"):
        super().__init__()
        self.component = component

    def filter(self, record):
        record.request_id = get_request_id()
        record.component = self.component
        return True


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    component: str = None
) -> logging.Logger:
    """
    Setup logger with colorlog formatting.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        component: Component name for contextualized logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    # Component name (use module name if not specified)
    comp = component or name.split(".")[-1].upper()

    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))

    console_formatter = colorlog.ColoredFormatter(
        fmt=(
            "%(log_color)s[%(asctime)s.%(msecs)03d] "
            "%(levelname)-8s "
            "%(white)s[%(request_id)s] "
            "%(cyan)s[%(component)s] "
            "%(message_log_color)s%(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "blue",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={
            "message": {
                "DEBUG": "white",
                "INFO": "white",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            }
        },
        reset=True,
        style="%"
    )

    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(ContextFilter(comp))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)

        # JSON-style formatter for file (easier parsing)
        file_formatter = logging.Formatter(
            fmt=(
                '{"timestamp":"%(asctime)s.%(msecs)03d",'
                '"level":"%(levelname)s",'
                '"request_id":"%(request_id)s",'
                '"component":"%(component)s",'
                '"logger":"%(name)s",'
                '"message":"%(message)s"}'
            ),
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(ContextFilter(comp))
        logger.addHandler(file_handler)

    return logger


def print_banner(brand: str = "JCELL"):
    """Print application startup banner."""
    title = f"📱  {brand.upper()} - CHECKLIST TÉCNICO"
    banner = f"""
╔══════════════════════════════════════════════════════════╗
║                                                          ║
║   {title:<55}║
║   Device inspection, diagnostics & PDF export            ║
║                                                          ║
╚══════════════════════════════════════════════════════════╝
"""
    console.print(banner, style="bold cyan")


def print_health_check_table(checks: dict):
    """
    Print health check results in a formatted table.

    Args:
        checks: Dict of check_name -> (status: bool, details: str)
    """
    table = Table(title="🏥 System Health Checks", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=30)
    table.add_column("Status", width=12)
    table.add_column("Details", style="dim")

    for component, (status, details) in checks.items():
        status_icon = "✓ READY" if status else "✗ FAILED"
        status_style = "green" if status else "red"
        table.add_row(
            component,
            f"[{status_style}]{status_icon}[/{status_style}]",
            details
        )

    console.print(table)


def print_summary_panel(title: str, content: dict, style: str = "green"):
    """
    Print summary information in a panel.

    Args:
        title: Panel title
        content: Dict of key-value pairs to display
        style: Panel border style (green, yellow, red, cyan)
    """
    text = "\n".join([f"[bold]{k}:[/bold] {v}" for k, v in content.items()])
    panel = Panel(text, title=title, border_style=style, expand=False)
    console.print(panel)


def print_generation_result(
    service_order: str,
    diagnostics: list,
    page_count: int,
    processing_time: float,
    report_path: Optional[str] = None
):
    """
    Print the outcome of a checklist generation.

    Args:
        service_order: Service order of the case
        diagnostics: Diagnostic statements emitted for the case
        page_count: Number of PDF pages written
        processing_time: Total processing time in seconds
        report_path: Path to generated PDF
    """
    findings = "\n".join(f"• {line}" for line in diagnostics)

    content = f"""[bold]OS:[/bold] {service_order}
[bold]Pages:[/bold] {page_count}
[bold]Processing Time:[/bold] {processing_time:.2f}s

[bold]Diagnostics:[/bold]
{findings}"""

    if report_path:
        content += f"\n\n[bold]Report:[/bold] {report_path}"

    panel = Panel(
        content,
        title="Checklist Generated",
        border_style="green",
        expand=False
    )
    console.print(panel)


def print_error(error_type: str, message: str, details: Optional[str] = None):
    """
    Print error message in formatted panel.

    Args:
        error_type: Type of error
        message: Error message
        details: Optional detailed error information
    """
    content = f"[bold red]{error_type}[/bold red]\n\n{message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"

    panel = Panel(
        content,
        title="❌ Error",
        border_style="red",
        expand=False
    )
    console.print(panel)


if __name__ == "__main__":
    logger = setup_logger("test", level="DEBUG", component="TEST")

    set_request_id("test123")

    logger.debug("This is a debug message")
    logger.info("This is an info message")
    logger.warning("This is a warning message")

    print_banner()

    print_generation_result(
        service_order="OS123",
        diagnostics=["Problema na tela: Possível necessidade de troca do display"],
        page_count=2,
        processing_time=0.42,
        report_path="reports/checklist-JCELL-OS123.pdf"
    )
