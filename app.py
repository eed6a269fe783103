import os

from rfid_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    # Scans and device polls arrive concurrently.
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), threaded=True)
