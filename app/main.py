"""
Main entry point for the inspection checklist.
Performs startup health checks before launching the UI.
"""

import sys
import subprocess
from pathlib import Path

from utils.logger import (
    setup_logger, print_banner, print_health_check_table,
    print_summary_panel
)
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="MAIN")


def startup_health_checks() -> bool:
    """
    Perform startup health checks.

    Returns:
        True if all checks pass, False otherwise
    """
    print_banner(config.brand_name)

    logger.info("=" * 80)
    logger.info("CHECKLIST - STARTUP HEALTH CHECKS")
    logger.info("=" * 80)

    all_healthy = True
    health_results = {}

    # ====================================================================
    # 1. Configuration Validation
    # ====================================================================
    logger.info("1. Checking configuration...")
    logger.info(f"   ✓ Environment: {config.environment}")
    logger.info(f"   ✓ Brand: {config.brand_name}")
    logger.info(
        f"   ✓ Page: {config.page_width_mm:g}x{config.page_height_mm:g}mm, "
        f"margin {config.page_margin_mm:g}mm"
    )
    health_results["Configuration"] = (True, "All settings loaded")

    # ====================================================================
    # 2. File System Checks
    # ====================================================================
    logger.info("2. Checking file system...")
    try:
        config.get_report_dir()
        config.get_log_dir()

        logger.info("   ✓ Report directory: writable")
        logger.info("   ✓ Log directory: writable")

        health_results["File System"] = (True, "All directories accessible")

    except OSError as e:
        logger.error(f"   ✗ File system check failed: {e}")
        health_results["File System"] = (False, f"Error: {e}")
        all_healthy = False

    # ====================================================================
    # 3. Renderer Check
    # ====================================================================
    logger.info("3. Checking renderer...")
    try:
        from src.reporting.renderer import DocumentRenderer

        renderer = DocumentRenderer()
        logger.info(f"   ✓ Renderer ready: {renderer.width}px wide")
        health_results["Renderer"] = (True, f"Font: {renderer.font_path or 'Pillow default (no marker glyphs)'}")

    except (OSError, ValueError, AttributeError) as e:
        logger.error(f"   ✗ Renderer check failed: {e}")
        health_results["Renderer"] = (False, f"Error: {e}")
        all_healthy = False

    # ====================================================================
    # 4. PDF Backend Check
    # ====================================================================
    logger.info("4. Checking PDF backend...")
    try:
        import reportlab

        logger.info(f"   ✓ ReportLab {reportlab.Version}")
        health_results["PDF Backend"] = (True, f"ReportLab {reportlab.Version}")

    except ImportError as e:
        logger.error(f"   ✗ PDF backend unavailable: {e}")
        health_results["PDF Backend"] = (False, f"Error: {e}")
        all_healthy = False

    # ====================================================================
    # Final Status
    # ====================================================================
    logger.info("=" * 80)

    print_health_check_table(health_results)

    if all_healthy:
        logger.info("✓ ALL HEALTH CHECKS PASSED - SYSTEM READY")
        print_summary_panel(
            "System Configuration",
            {
                "Environment": config.environment.upper(),
                "Brand": config.brand_name,
                "Reports": str(Path(config.report_dir).resolve()),
                "Max photo size": f"{config.max_photo_size_mb:g}MB",
            },
            style="green"
        )
    else:
        logger.error("✗ SOME HEALTH CHECKS FAILED - SYSTEM MAY NOT FUNCTION PROPERLY")
        print_summary_panel(
            "⚠️  Health Check Failures",
            {
                "Status": "FAILED",
                "Action": "Please fix the errors above before using the system"
            },
            style="red"
        )

    logger.info("=" * 80)

    return all_healthy


def main():
    """Main entry point."""
    logger.info("Starting checklist app...")

    if config.skip_health_checks:
        logger.warning("⚠️  Health checks SKIPPED (SKIP_HEALTH_CHECKS=true)")
    elif not startup_health_checks():
        logger.error("❌ Startup health checks failed.")
        logger.error("   To bypass health checks (NOT RECOMMENDED), set:")
        logger.error("   SKIP_HEALTH_CHECKS=true in .env")
        sys.exit(1)

    logger.info("🚀 Launching Streamlit UI...")

    ui_path = Path(__file__).parent / "ui.py"

    if not ui_path.exists():
        logger.error(f"❌ UI file not found: {ui_path}")
        sys.exit(1)

    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(ui_path),
        "--server.port=8501",
        "--server.address=localhost",
        "--browser.gatherUsageStats=false"
    ]

    try:
        logger.info(f"   Command: {' '.join(cmd)}")
        logger.info("   Access the UI at: http://localhost:8501")
        logger.info("   Press Ctrl+C to stop the server")

        rc = subprocess.run(cmd).returncode
        sys.exit(rc)

    except KeyboardInterrupt:
        logger.info("Shutting down gracefully...")
        sys.exit(0)


if __name__ == "__main__":
    main()
