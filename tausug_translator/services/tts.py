import logging
import threading
import numpy as np
import sounddevice as sd
from TTS.api import TTS

from tausug_translator.models.state import NOT_FOUND_TEXT, TTS_LOCALES, TAUSUG

logger = logging.getLogger(__name__)


class TTSService:
    """Speaks translations with one Coqui model per locale (fil-PH, en-US)."""

    def __init__(self, models: dict[str, str]):
        self._models = dict(models)
        self._engines: dict[str, TTS] = {}
        self._speakers: dict[str, str | None] = {}
        self._rates: dict[str, int] = {}
        self._loading: set[str] = set()
        self._lock = threading.Lock()

    def locale_for(self, language: str) -> str:
        return TTS_LOCALES.get(language, TTS_LOCALES[TAUSUG])

    def init_async(self, locale: str):
        with self._lock:
            if locale in self._engines or locale in self._loading:
                return
            self._loading.add(locale)
        model_name = self._models.get(locale)

        def worker():
            try:
                eng = TTS(model_name=model_name, gpu=False)
                speakers = getattr(eng, "speakers", []) or []
                synth = getattr(eng, "synthesizer", None)
                with self._lock:
                    self._engines[locale] = eng
                    self._speakers[locale] = speakers[5] if len(speakers) > 5 else (speakers[0] if speakers else None)
                    self._rates[locale] = getattr(synth, "output_sample_rate", 22050)
                logger.info("TTS model %s ready for %s", model_name, locale)
            except Exception:
                logger.warning("Could not load TTS model %s", model_name, exc_info=True)
            finally:
                with self._lock:
                    self._loading.discard(locale)
        threading.Thread(target=worker, daemon=True).start()

    def speak(self, text: str | None, language: str) -> bool:
        if not text or not text.strip() or text == NOT_FOUND_TEXT:
            return False
        locale = self.locale_for(language)
        with self._lock:
            eng = self._engines.get(locale)
            speaker = self._speakers.get(locale)
            rate = self._rates.get(locale, 22050)
        if eng is None:
            # erstes Mal: Modell laden, nächster Klick spricht
            self.init_async(locale)
            return False

        def worker():
            try:
                kwargs = {"speaker": speaker} if speaker else {}
                wav = np.asarray(eng.tts(text, **kwargs), dtype=np.float32)
                wav = np.clip(wav * 2.0, -1.0, 1.0)
                self.stop()
                sd.play(wav, rate, blocking=False)
            except Exception:
                logger.warning("Speech playback failed for %s", locale, exc_info=True)
        threading.Thread(target=worker, daemon=True).start()
        return True

    def stop(self):
        try:
            sd.stop()
        except Exception:
            logger.debug("sounddevice stop failed", exc_info=True)
