import argparse
import uvicorn

SERVICES = {
    "gateway": "app:app",
    "subtitles": "services.subtitles.app:app",
}

def main():
    parser = argparse.ArgumentParser(description="Bootloader for subtrans FastAPI services.")
    parser.add_argument("service", choices=SERVICES.keys(), help="Service to start")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev mode)")
    parser.add_argument("--init-db", action="store_true", help="Create database tables before starting")
    args = parser.parse_args()

    if args.init_db:
        from database import init_database

        init_database()

    app_path = SERVICES[args.service]
    print(f"[BOOTLOADER] Starting {args.service} on {args.host}:{args.port} ...")
    uvicorn.run(app_path, host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    main()
