# run_all.py
import sys
import subprocess

from gst_invoice.core.config import settings


def main():
    uvicorn_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "gst_invoice.main:app",
        "--host", "0.0.0.0",
        "--port", "8000",
    ]
    if settings.ENVIRONMENT == "dev":
        uvicorn_cmd.append("--reload")

    print(f"▶ Starting APP: {' '.join(uvicorn_cmd)}")
    try:
        subprocess.run(uvicorn_cmd, check=True)
    except KeyboardInterrupt:
        print("Shutting down...")


if __name__ == "__main__":
    main()
