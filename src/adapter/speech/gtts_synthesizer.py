"""gTTS adapter — implements SpeechSynthesisPort with Google Text-to-Speech."""

import io
import logging

from gtts import gTTS
from gtts.tts import gTTSError

from port.speech import SpeechError

logger = logging.getLogger(__name__)


class GTTSSynthesizer:
    """Synthesizes MP3 audio with gTTS. Blocking; callers run it in a thread."""

    def synthesize(self, text: str, locale: str) -> bytes:
        # gTTS takes a bare language tag: 'ja-JP' -> 'ja'
        lang = locale.split("-")[0] if locale else "en"
        buffer = io.BytesIO()
        try:
            gTTS(text=text, lang=lang, slow=False).write_to_fp(buffer)
        except (gTTSError, ValueError) as e:
            logger.error("gTTS synthesis failed", extra={"lang": lang, "error": str(e)})
            raise SpeechError(str(e)) from e
        return buffer.getvalue()

    def cancel(self) -> None:
        # Audio is returned whole; nothing is playing server-side
        pass
