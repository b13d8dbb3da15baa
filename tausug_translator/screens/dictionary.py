import logging
import threading
from pathlib import Path
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.gridlayout import GridLayout
from kivy.uix.scrollview import ScrollView
from kivy.uix.popup import Popup
from kivy.uix.label import Label
from kivy.uix.spinner import Spinner
from kivy.uix.textinput import TextInput
from kivy.uix.filechooser import FileChooserListView
from kivy.clock import Clock
from tausug_translator.errors import StorageWriteError, TranslatorError
from tausug_translator.models.state import WORD_CATEGORIES, StatusMessage
from tausug_translator.services.submission import open_source_page, submit_word
from tausug_translator.ui.widgets import RoundedButton as Button, confirm_popup

logger = logging.getLogger(__name__)


class DictionaryScreen:
    def _build_dictionary_panel(self):
        self.stats_label = Label(text="", size_hint=(1, None), height=64, font_size=20,
                                 color=self.theme["text"], halign='center')
        self.add_widget(self.stats_label)

        add_row = BoxLayout(size_hint=(1, None), height=56, spacing=8)
        self.new_word_inp = TextInput(hint_text="Tausug word", multiline=False, font_size=22)
        self.new_meaning_inp = TextInput(hint_text="English meaning", multiline=False, font_size=22)
        self.category_spinner = Spinner(text=WORD_CATEGORIES[0], values=list(WORD_CATEGORIES), size_hint=(None, 1), width=150, font_size=20)
        add_btn = Button(text="Add", size_hint=(None, 1), width=110, font_size=22, background_color=self.theme["success"])
        suggest_btn = Button(text="Suggest", size_hint=(None, 1), width=130, font_size=22, background_color=self.theme["accent"])
        add_btn.bind(on_release=self.add_word)
        suggest_btn.bind(on_release=self.suggest_word)
        self.new_meaning_inp.bind(on_text_validate=self.add_word)
        for w in (self.new_word_inp, self.new_meaning_inp, self.category_spinner, add_btn, suggest_btn):
            add_row.add_widget(w)
        self.add_widget(add_row)

        export_row = BoxLayout(size_hint=(1, None), height=52, spacing=8)
        export_btn = Button(text="Export", font_size=20, background_color=self.theme["primary"])
        export_sorted_btn = Button(text="Export A-Z", font_size=20, background_color=self.theme["primary"])
        export_submit_btn = Button(text="Export for GitHub", font_size=20, background_color=self.theme["primary"])
        source_btn = Button(text="dictionary.js", font_size=20, background_color=self.theme["surface"])
        export_btn.bind(on_release=lambda *_: self.open_export_popup("plain"))
        export_sorted_btn.bind(on_release=lambda *_: self.open_export_popup("sorted"))
        export_submit_btn.bind(on_release=lambda *_: self.open_export_popup("submission"))
        source_btn.bind(on_release=lambda *_: self.open_export_popup("source"))
        for b in (export_btn, export_sorted_btn, export_submit_btn, source_btn):
            export_row.add_widget(b)
        self.add_widget(export_row)

        tools_row = BoxLayout(size_hint=(1, None), height=52, spacing=8)
        import_btn = Button(text="Import", font_size=20, background_color=self.theme["success"])
        reload_btn = Button(text="Load community", font_size=20, background_color=self.theme["warning"])
        reset_btn = Button(text="Reset", font_size=20, background_color=self.theme["danger"])
        view_btn = Button(text="View source", font_size=20, background_color=self.theme["surface"])
        import_btn.bind(on_release=self.open_import_popup)
        reload_btn.bind(on_release=self.reload_community)
        reset_btn.bind(on_release=self.confirm_reset)
        view_btn.bind(on_release=lambda *_: open_source_page(self.settings.SOURCE_URL))
        for b in (import_btn, reload_btn, reset_btn, view_btn):
            tools_row.add_widget(b)
        self.add_widget(tools_row)

        self._register(self.new_word_inp, self.new_meaning_inp, self.category_spinner, add_btn, suggest_btn,
                       export_btn, export_sorted_btn, export_submit_btn, source_btn,
                       import_btn, reload_btn, reset_btn, view_btn)

    def refresh_stats(self):
        stats = self.session.stats()
        self.stats_label.text = (f"Total words: {stats.total}\n"
                                 f"Community: {stats.community}  |  User: {stats.user}")

    # ---- Add / Suggest ----
    def _read_new_word(self):
        tausug = (self.new_word_inp.text or "").strip()
        english = (self.new_meaning_inp.text or "").strip()
        return tausug, english

    def add_word(self, *_):
        tausug, english = self._read_new_word()
        if not tausug or not english:
            self.show_notice("Both fields required")
            return
        if self.session.has_word(tausug):
            confirm_popup(f'Overwrite "{tausug}"?', lambda: self._commit_add(tausug, english))
            return
        self._commit_add(tausug, english)

    def _commit_add(self, tausug: str, english: str):
        try:
            self.session.add_word(tausug, english)
        except StorageWriteError as e:
            self.show_status(StatusMessage(f"Error: {e}", "error"))
            return
        except TranslatorError as e:
            self.show_notice(str(e))
            return
        self.show_status(StatusMessage(f"Added: {tausug} = {english}", "success"))
        self.new_word_inp.text = ""
        self.new_meaning_inp.text = ""
        self.refresh_stats()
        self.input_text.focus = True

    def suggest_word(self, *_):
        tausug, english = self._read_new_word()
        if not tausug or not english:
            self.show_notice("Enter both words")
            return
        submit_word(self.settings.ISSUES_URL, tausug, english, self.category_spinner.text)
        self.show_status(StatusMessage("Submitted to GitHub!", "success"))

    # ---- Export / Import ----
    def _file_popup(self, title: str, action_text: str, on_pick, *, dirselect: bool = False):
        root = BoxLayout(orientation='vertical', spacing=10, padding=12)
        chooser = FileChooserListView(path=str(Path.home()), dirselect=dirselect,
                                      filters=[] if dirselect else ["*.json"])
        root.add_widget(chooser)
        bar = BoxLayout(size_hint=(1, None), height=60, spacing=8)
        cancel_btn = Button(text="Cancel", font_size=22, background_color=self.theme["closeButton"])
        ok_btn = Button(text=action_text, font_size=22, background_color=self.theme["success"])
        bar.add_widget(cancel_btn)
        bar.add_widget(ok_btn)
        root.add_widget(bar)
        popup = Popup(title=title, content=root, size_hint=(0.9, 0.9), auto_dismiss=True)

        def _ok(*_):
            picked = chooser.selection[0] if chooser.selection else (chooser.path if dirselect else None)
            if not picked:
                self.show_notice("Choose a file first")
                return
            popup.dismiss()
            on_pick(Path(picked))
        cancel_btn.bind(on_release=lambda *_: popup.dismiss())
        ok_btn.bind(on_release=_ok)
        popup.open()

    def open_export_popup(self, kind: str = "plain"):
        self._file_popup("Export dictionary to folder", "Save here", lambda p: self._do_export(p, kind), dirselect=True)

    def _do_export(self, directory: Path, kind: str):
        if directory.is_file():
            directory = directory.parent
        try:
            if kind == "source":
                path = self.session.export_source_module(directory)
                msg = f"{path.name} generated"
            else:
                path = self.session.export_file(directory, sorted_keys=(kind == "sorted"),
                                                for_submission=(kind == "submission"))
                count = self.session.stats().total
                msg = f"Dictionary exported ({count} words{', alphabetical' if kind == 'sorted' else ''})"
        except OSError as e:
            logger.exception("Export to %s failed", directory)
            self.show_status(StatusMessage(f"Error: could not write file ({e.strerror or e})", "error"))
            return
        self.show_status(StatusMessage(msg, "success"))

    def open_import_popup(self, *_):
        self._file_popup("Import dictionary", "Import", self._do_import)

    def _do_import(self, path: Path):
        self.show_status(self.session.try_import_file(path))
        self.refresh_stats()

    # ---- Community / Reset ----
    def reload_community(self, *_):
        self.state.ready = False
        self._set_controls_enabled(False)
        self.status_bar.show(StatusMessage("Loading..."), hold=True)

        def worker():
            try:
                msg = self.session.reload_community_dictionary()
            except Exception:
                logger.exception("Reloading the community dictionary failed")
                msg = StatusMessage("Using local dictionary only")
            Clock.schedule_once(lambda dt: self._after_reload(msg), 0)
        threading.Thread(target=worker, daemon=True).start()

    def _after_reload(self, msg: StatusMessage):
        self.state.ready = True
        self._set_controls_enabled(True)
        self.refresh_stats()
        self.show_status(msg)

    def confirm_reset(self, *_):
        def _reset():
            try:
                self.session.reset()
            except StorageWriteError as e:
                self.show_status(StatusMessage(f"Error: {e}", "error"))
                return
            self.refresh_stats()
            self.show_status(StatusMessage("Reset to default dictionary", "success"))
        confirm_popup("Replace your dictionary with the 10 default words?", _reset)

    # ---- Sentences ----
    def open_sentences_popup(self, word: str):
        examples = self.session.example_sentences(word)
        root = BoxLayout(orientation='vertical', spacing=10, padding=12)
        sv = ScrollView(size_hint=(1, 1))
        grid = GridLayout(cols=1, spacing=8, size_hint_y=None, padding=(0, 6))
        grid.bind(minimum_height=grid.setter('height'))
        if examples:
            for idx, ex in enumerate(examples, start=1):
                self._add_sentence_label(grid, f"{idx}. {ex['tausug']}", 26, self.theme["text"])
                if ex.get("pronunciation"):
                    self._add_sentence_label(grid, f"/{ex['pronunciation']}/", 20, self.theme["muted"])
                self._add_sentence_label(grid, f"English: {ex['english']}", 22, (0.8, 0.9, 1, 1))
        else:
            self._add_sentence_label(grid, f'No example sentences for "{word.strip().lower()}".', 22, self.theme["muted"])
        sv.add_widget(grid)
        root.add_widget(sv)
        close_btn = Button(text="Close", size_hint=(1, None), height=60, font_size=24, background_color=self.theme["closeButton"])
        root.add_widget(close_btn)
        self.sentences_popup = Popup(title=f"Examples – {word}", content=root, size_hint=(0.9, 0.8), auto_dismiss=True)
        close_btn.bind(on_release=lambda *_: self.sentences_popup.dismiss())
        self.sentences_popup.bind(on_dismiss=lambda *_: setattr(self, "sentences_popup", None))
        self.sentences_popup.open()

    def _add_sentence_label(self, grid: GridLayout, text: str, font_size: int, color):
        lbl = Label(text=text, font_size=font_size, size_hint_y=None, color=color, halign='left', valign='top')
        lbl.bind(width=lambda inst, val: setattr(inst, 'text_size', (val, None)))
        lbl.bind(texture_size=lambda inst, val: setattr(inst, 'height', val[1] + 6))
        grid.add_widget(lbl)
        return lbl
