
import sys
from vcardgen.config import AppConfig
from vcardgen.contact import build_vcard
from vcardgen.qr import build_qr_png, decode_qr_from_bytes

if __name__ == "__main__":
    if len(sys.argv) > 2:
        print("Usage: python scripts/qr_smoke.py [image_path]")
        sys.exit(1)
    if len(sys.argv) == 2:
        with open(sys.argv[1], "rb") as f:
            print("Decoded:", decode_qr_from_bytes(f.read()))
        sys.exit(0)

    # No image: render the DEFAULT_* contact and check the QR carries it unchanged
    cfg = AppConfig.from_env()
    payload = build_vcard(cfg.defaults)
    png = build_qr_png(payload, cfg.qr)
    if png is None:
        print("Payload too large for a QR code")
        sys.exit(2)
    decoded = decode_qr_from_bytes(png)
    ok = decoded == payload
    print("Round trip:", "OK" if ok else f"MISMATCH ({decoded!r})")
    sys.exit(0 if ok else 3)
