#!/usr/bin/env python3
"""
BeanStore Backend Runner
========================

Run the BeanStore API in different modes.

Usage:
    python run_app.py                    # Development mode with auto-reload
    python run_app.py --mode prod        # Production mode, WORKERS processes
    python run_app.py --mode prod --workers 2
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
    python run_app.py --seed             # Load sample products and the default admin first
"""

import argparse
import asyncio
import os
import sys

def print_banner():
    """Print application banner"""
    banner = """
╔═══════════════════════════════════════════════════════╗
║                   ☕ BeanStore Backend                 ║
╚═══════════════════════════════════════════════════════╝
    """
    print(banner)

def check_environment():
    """Check if environment is properly set up"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    elif os.environ.get("DATABASE_URL") and os.environ.get("SECRET_KEY"):
        print("✅ DATABASE_URL and SECRET_KEY set in environment")
    else:
        print("❌ No .env file and DATABASE_URL / SECRET_KEY are not set")
        return False

    return True

def run_main_app(host="0.0.0.0", port=8000, reload=True, workers=1):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting BeanStore API on {host}:{port}")
    print(f"📖 API Docs: http://{host}:{port}/api/docs")
    print("\n" + "="*50)

    import uvicorn
    try:
        uvicorn.run(
            "beanstore.main:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=None if reload else workers,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")

def main():
    parser = argparse.ArgumentParser(
        description="BeanStore Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes in prod mode (default: WORKERS setting)"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed sample data before starting"
    )

    args = parser.parse_args()

    print_banner()

    if not check_environment():
        return 1

    from beanstore.core.config import get_settings
    settings = get_settings()

    if args.seed:
        from beanstore.seed import seed

        asyncio.run(seed(settings))
        print("✅ Sample data loaded")

    workers = args.workers if args.workers is not None else settings.WORKERS
    run_main_app(args.host, args.port, reload=args.mode == "dev", workers=workers)
    return 0

if __name__ == "__main__":
    sys.exit(main())
