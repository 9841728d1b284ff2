import base64
import io

import qrcode


def encode_png(payload: str) -> bytes:
    img = qrcode.make(payload)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def encode_data_url(payload: str) -> str:
    png_b64 = base64.b64encode(encode_png(payload)).decode("utf-8")
    return f"data:image/png;base64,{png_b64}"
