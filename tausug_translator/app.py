import logging
import threading

from kivy.config import Config
Config.set('kivy', 'exit_on_escape', '0')

from kivy.app import App
from kivy.clock import Clock
from kivy.core.window import Window

from tausug_translator.config import Settings, get_settings
from tausug_translator.models.state import StatusMessage
from tausug_translator.screens.main import TranslatorRoot
from tausug_translator.session import TranslatorSession

logger = logging.getLogger(__name__)


class TranslatorApp(App):
    title = "Tausug Translator"

    def __init__(self, settings: Settings | None = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings or get_settings()
        self.session = TranslatorSession(self.settings)
        self.tts = None

    def build(self):
        Window.size = (self.settings.WINDOW_WIDTH, self.settings.WINDOW_HEIGHT)
        if self.settings.TTS_ENABLED:
            # schwere Imports (torch) erst hier
            from tausug_translator.services.tts import TTSService
            self.tts = TTSService(self.settings.tts_models)
        self.session.hydrate()
        return TranslatorRoot(self.session, tts=self.tts)

    def on_start(self):
        logger.info("Tausug Translator starting...")
        threading.Thread(target=self._load_community, daemon=True).start()

    def _load_community(self):
        try:
            messages = self.session.load_community()
        except Exception:
            logger.exception("Loading community data failed")
            messages = [StatusMessage("Using local dictionary only")]
        Clock.schedule_once(lambda dt: self.root.on_ready(messages), 0)

    def on_stop(self):
        if self.tts:
            self.tts.stop()


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    TranslatorApp(settings).run()


if __name__ == "__main__":
    main()
