"""
Editing Session.

`EditorSession` owns the state shared by the code pane, the live preview and
the property panel:

- **Code changes** (typing, examples, loads) are parsed. A valid snippet
  replaces the tree and clears the selection; a syntax error is reported and
  the previous tree is kept.
- **Visual edits** (inline text, style and panel text changes) replace the
  tree, re-serialize it and publish the new code. The code change caused by
  a visual edit is tagged with a one-shot flag so it is *not* parsed again;
  re-parsing would assign fresh ids and lose the selection and any inline
  edit in progress.
- **Auto-save** hands every accepted code change to a debouncer. Only the
  last change of a burst reaches the save callback and the store.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional

from rich.markup import escape

from jsx_editor.config import EditorConfig
from jsx_editor.core.jsx import parse_markup, serialize
from jsx_editor.core.tree import TreeNode, find_node_by_id, set_node_text, update_node_style, update_node_text
from jsx_editor.editor.debounce import Debouncer, Scheduler
from jsx_editor.editor.panel import PropertySnapshot
from jsx_editor.editor.store import ComponentStore, ComponentStoreError
from jsx_editor.enums import ParseStatus
from jsx_editor.preview import InteractionState, PreviewSurface, render
from jsx_editor.utils.console import log_error, log_info, log_success

DEFAULT_CODE = """<div className="p-6 bg-blue-500 rounded-lg">
  <h1 className="text-3xl font-bold text-white mb-2">Hello World</h1>
  <p className="text-white text-lg">Click any element to edit its properties</p>
  <button className="mt-4 px-4 py-2 bg-white text-blue-500 rounded font-medium">
    Click Me
  </button>
</div>"""

EXAMPLES: Dict[str, str] = {
  "card": """<div className="max-w-sm bg-white rounded-xl shadow-lg overflow-hidden">
  <div className="p-6">
    <h2 className="text-xl font-bold text-gray-800 mb-2">Card Title</h2>
    <p className="text-gray-600 mb-4">This is a simple card component with some description text.</p>
    <button className="px-4 py-2 bg-blue-500 text-white rounded-lg">Learn More</button>
  </div>
</div>""",
  "hero": """<section className="bg-gradient-to-r from-purple-600 to-blue-500 py-20 px-8 text-center">
  <h1 className="text-5xl font-bold text-white mb-4">Welcome to Our Site</h1>
  <p className="text-xl text-white mb-8">Build something amazing today</p>
  <div className="flex justify-center gap-4">
    <button className="px-6 py-3 bg-white text-purple-600 rounded-lg font-bold">Get Started</button>
    <button className="px-6 py-3 bg-transparent border-2 border-white text-white rounded-lg font-bold">Learn More</button>
  </div>
</section>""",
  "pricing": """<div className="bg-white rounded-2xl shadow-xl p-8 max-w-xs">
  <h3 className="text-lg font-medium text-gray-500 mb-2">Pro Plan</h3>
  <div className="text-4xl font-bold text-gray-900 mb-4">$29/mo</div>
  <ul className="space-y-3 mb-6">
    <li className="text-gray-600">Unlimited projects</li>
    <li className="text-gray-600">Priority support</li>
    <li className="text-gray-600">Custom domain</li>
  </ul>
  <button className="w-full py-3 bg-blue-500 text-white rounded-lg font-bold">Subscribe</button>
</div>""",
  "navbar": """<nav className="bg-gray-900 px-6 py-4">
  <div className="flex items-center justify-between">
    <div className="text-xl font-bold text-white">Logo</div>
    <div className="flex gap-6">
      <a className="text-gray-300 hover:text-white">Home</a>
      <a className="text-gray-300 hover:text-white">About</a>
      <a className="text-gray-300 hover:text-white">Services</a>
      <a className="text-gray-300 hover:text-white">Contact</a>
    </div>
    <button className="px-4 py-2 bg-blue-500 text-white rounded-lg">Sign Up</button>
  </div>
</nav>""",
}

CodeListener = Callable[[str, bool], None]


class EditorSession:
  """
  State and operations of one editing session.

  Attributes:
      code (str): Current markup text.
      tree (Optional[TreeNode]): Tree of the last valid snippet.
      selected_id (Optional[str]): Selected element (or text) node.
      editing_id (Optional[str]): Text node being edited inline.
      parse_error (Optional[str]): Message of the last syntax error.
      notice (Optional[str]): Message shown when the code is not markup.
      component_id (Optional[str]): Id of the stored component, once saved.
      saving (bool): True while a save is running.
      last_saved (Optional[datetime]): Time of the last successful save.

  Raises:
      RuntimeError: If autosave is enabled without a `scheduler` and no event
      loop is running.
  """

  def __init__(
    self,
    code: Optional[str] = None,
    config: Optional[EditorConfig] = None,
    store: Optional[ComponentStore] = None,
    scheduler: Optional[Scheduler] = None,
    on_save: Optional[Callable[[str], None]] = None,
  ) -> None:
    self.config = config or EditorConfig()
    self.store = store
    self.on_save = on_save

    self.code = ""
    self.tree: Optional[TreeNode] = None
    self.selected_id: Optional[str] = None
    self.editing_id: Optional[str] = None
    self.parse_error: Optional[str] = None
    self.notice: Optional[str] = None
    self.component_id: Optional[str] = None
    self.saving = False
    self.last_saved: Optional[datetime] = None

    self._visual_edit = False
    self._listeners: List[CodeListener] = []
    self._autosave: Optional[Debouncer] = None
    if self.config.autosave_enabled:
      self._autosave = Debouncer(self.config.autosave_delay, self._run_autosave, scheduler)

    # The initial snippet is displayed, not saved.
    self.code = DEFAULT_CODE if code is None else code
    self._observe_code()

  # --- Code Changes ---

  def subscribe(self, listener: CodeListener) -> Callable[[], None]:
    """
    Registers a code listener.

    Args:
        listener: Receives `(code, from_visual_edit)` after every code change.

    Returns:
        Callable[[], None]: Unsubscribes the listener.
    """
    self._listeners.append(listener)
    return lambda: self._listeners.remove(listener) if listener in self._listeners else None

  def set_code(self, code: str) -> None:
    """Applies code typed or pasted by the user."""
    self._visual_edit = False
    self._change_code(code)

  def load_example(self, key: str) -> None:
    """
    Replaces the code with a bundled example.

    Raises:
        KeyError: If the example does not exist.
    """
    if key not in EXAMPLES:
      raise KeyError(f"Unknown example '{key}'. Available: {', '.join(sorted(EXAMPLES))}")
    self.set_code(EXAMPLES[key])

  def _change_code(self, code: str) -> None:
    from_visual_edit = self._visual_edit
    self.code = code
    accepted = self._observe_code()
    for listener in list(self._listeners):
      listener(code, from_visual_edit)
    if accepted:
      self._schedule_autosave()

  def _observe_code(self) -> bool:
    """
    Reacts to a code change.

    Returns:
        bool: True when the change is valid content to save.
    """
    if self._visual_edit:
      self._visual_edit = False
      return True

    outcome = parse_markup(self.code)
    if outcome.status == ParseStatus.OK:
      self.tree = outcome.tree
      self.parse_error = None
      self.notice = None
      self.selected_id = None
      self.editing_id = None
      return True

    if outcome.status == ParseStatus.SYNTAX_ERROR:
      self.parse_error = outcome.message
      return False

    self.tree = None
    self.parse_error = None
    self.selected_id = None
    self.editing_id = None
    self.notice = outcome.message
    return False

  def _apply_visual_edit(self, tree: TreeNode) -> None:
    if tree is self.tree:
      return
    self.tree = tree
    self.parse_error = None
    self._visual_edit = True
    self._change_code(serialize(tree, indent_width=self.config.indent_width))

  # --- Selection ---

  def select(self, node_id: Optional[str]) -> None:
    self.selected_id = node_id

  def start_editing(self, node_id: str) -> None:
    self.editing_id = node_id

  def stop_editing(self) -> None:
    self.editing_id = None

  @property
  def selected_node(self) -> Optional[TreeNode]:
    if self.tree is None:
      return None
    return find_node_by_id(self.tree, self.selected_id)

  def property_snapshot(self) -> Optional[PropertySnapshot]:
    """Panel state of the selected node, or None when nothing is selected."""
    node = self.selected_node
    return PropertySnapshot.from_node(node) if node is not None else None

  # --- Visual Edits ---

  def inline_text_edit(self, node_id: str, text: str) -> None:
    """Commits an inline edit of the text node `node_id`."""
    if self.tree is None:
      return
    self._apply_visual_edit(update_node_text(self.tree, node_id, text))

  def update_style(self, style_updates: Dict[str, str]) -> None:
    """Merges `style_updates` into the inline style of the selected element."""
    if self.tree is None or self.selected_id is None:
      return
    self._apply_visual_edit(update_node_style(self.tree, self.selected_id, style_updates))

  def update_text(self, text: str) -> None:
    """Sets the text of the selected node from the panel."""
    if self.tree is None or self.selected_id is None:
      return
    self._apply_visual_edit(set_node_text(self.tree, self.selected_id, text))

  # --- Preview ---

  def interaction_state(self) -> InteractionState:
    return InteractionState(
      selected_id=self.selected_id,
      editing_id=self.editing_id,
      on_select=self.select,
      on_text_edit=self.inline_text_edit,
      on_start_edit=self.start_editing,
      on_stop_edit=self.stop_editing,
    )

  def render(self, inline_classes: bool = False) -> PreviewSurface:
    """Renders the current tree with this session's selection wired in."""
    return render(
      self.tree,
      self.interaction_state(),
      highlight_color=self.config.highlight_color,
      inline_classes=inline_classes,
    )

  # --- Persistence ---

  def _schedule_autosave(self) -> None:
    if self._autosave is not None:
      self._autosave(self.component_id, self.code)

  def flush_autosave(self) -> bool:
    """Runs a pending auto-save now. Returns True if one was pending."""
    return self._autosave.flush() if self._autosave is not None else False

  def _run_autosave(self, component_id: Optional[str], code: str) -> None:
    self.saving = True
    try:
      if self.on_save is not None:
        self.on_save(code)
      if self.config.enable_backend and component_id and self.store is not None:
        self.store.update(component_id, code)
      self.last_saved = datetime.now()
    except Exception as e:
      log_error(f"Auto-save failed: {escape(str(e))}")
    finally:
      self.saving = False

  def save(self) -> bool:
    """
    Saves the current code: creates the component on first save, then updates it.

    Returns:
        bool: True on success. Nothing is saved while the code has a syntax error.
    """
    if self.parse_error:
      return False

    self.saving = True
    try:
      if self.on_save is not None:
        self.on_save(self.code)

      if self.config.enable_backend and self.store is not None:
        if self.component_id:
          self.store.update(self.component_id, self.code)
        else:
          record = self.store.create(self.code, self.config.default_component_name)
          self.component_id = record.id
          log_info(f"Created component [id]{escape(record.id)}[/id]")

      self.last_saved = datetime.now()
      log_success("Component saved")
      return True
    except ComponentStoreError as e:
      log_error(f"Save failed: {escape(str(e))}")
      return False
    finally:
      self.saving = False

  def load(self, component_id: str) -> bool:
    """
    Loads a stored component into the session.

    Returns:
        bool: True when the component was loaded.
    """
    if not self.config.enable_backend or self.store is None:
      return False
    try:
      record = self.store.get(component_id)
    except ComponentStoreError as e:
      log_error(f"Failed to load component: {escape(str(e))}")
      return False
    self.component_id = record.id
    self.set_code(record.code)
    return True
