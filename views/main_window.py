"""
Main window view for the Lanhu UI Builder.
"""
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Callable, Dict, Iterable, Optional, Tuple

from utils.constants import DEFAULT_WINDOW_SIZE, CANVAS_BG_COLOR

# (item id, parent item id, label, kind) rows for the outline tree
OutlineRow = Tuple[str, str, str, str]


class MainWindow:
    """Main application window for the Lanhu UI Builder."""

    def __init__(self, root: tk.Tk) -> None:
        """
        Initialize the main window.

        Args:
            root: The root Tkinter window
        """
        self.root = root
        self.root.title("Lanhu UI Builder")
        self.root.geometry(DEFAULT_WINDOW_SIZE)

        # Variables for UI controls
        self.status_var = tk.StringVar(value="Ready")
        self.coords_var = tk.StringVar(value="X: 0.00  Y: 0.00")

        # Dictionary to store callback functions
        self.callbacks: Dict[str, Callable] = {}

        # Create UI components
        self._create_ui()

    def _create_ui(self) -> None:
        """Create the user interface components."""
        # Create main frame
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True)

        # Create toolbar frame
        toolbar = ttk.Frame(main_frame)
        toolbar.pack(fill=tk.X, side=tk.TOP, padx=5, pady=5)

        self.open_btn = ttk.Button(toolbar, text="Open Design")
        self.open_btn.pack(side=tk.LEFT, padx=5)

        self.reload_btn = ttk.Button(toolbar, text="Reload")
        self.reload_btn.pack(side=tk.LEFT, padx=5)

        self.fit_btn = ttk.Button(toolbar, text="Zoom to Fit")
        self.fit_btn.pack(side=tk.LEFT, padx=5)

        # Outline tree on the left, canvas on the right
        panes = ttk.PanedWindow(main_frame, orient=tk.HORIZONTAL)
        panes.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        tree_frame = ttk.Frame(panes)
        self.outline_tree = ttk.Treeview(tree_frame, columns=("kind",), selectmode="browse")
        self.outline_tree.heading("#0", text="Name")
        self.outline_tree.heading("kind", text="Type")
        self.outline_tree.column("kind", width=60, stretch=False)
        tree_scroll = ttk.Scrollbar(tree_frame, orient=tk.VERTICAL, command=self.outline_tree.yview)
        self.outline_tree.configure(yscrollcommand=tree_scroll.set)
        self.outline_tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        tree_scroll.pack(side=tk.RIGHT, fill=tk.Y)
        panes.add(tree_frame, weight=1)

        canvas_frame = ttk.Frame(panes)
        self.canvas = tk.Canvas(canvas_frame, bg=CANVAS_BG_COLOR)
        self.canvas.pack(fill=tk.BOTH, expand=True)
        panes.add(canvas_frame, weight=4)

        # Status bar
        status_bar = ttk.Label(main_frame, textvariable=self.status_var, relief=tk.SUNKEN, anchor=tk.W)
        status_bar.pack(fill=tk.X, side=tk.BOTTOM, padx=5, pady=2)

        # Coordinates display
        coords_label = ttk.Label(main_frame, textvariable=self.coords_var, relief=tk.SUNKEN, anchor=tk.E)
        coords_label.pack(fill=tk.X, side=tk.BOTTOM, padx=5, pady=2)

    def set_callbacks(self, callbacks: Dict[str, Callable]) -> None:
        """
        Set callback functions for UI events.

        Args:
            callbacks: Dictionary mapping event names to callback functions
        """
        self.callbacks = callbacks

        if "open_file" in callbacks:
            self.open_btn.config(command=callbacks["open_file"])

        if "reload_file" in callbacks:
            self.reload_btn.config(command=callbacks["reload_file"])

        if "zoom_to_fit" in callbacks:
            self.fit_btn.config(command=callbacks["zoom_to_fit"])

        if "outline_select" in callbacks:
            self.outline_tree.bind("<<TreeviewSelect>>", callbacks["outline_select"])

    def populate_outline(self, rows: Iterable[OutlineRow]) -> None:
        """
        Replace the outline tree contents.

        Args:
            rows: Rows in pre-order so parents are inserted before children
        """
        self.outline_tree.delete(*self.outline_tree.get_children())
        for item_id, parent_id, label, kind in rows:
            self.outline_tree.insert(parent_id, tk.END, iid=item_id, text=label, values=(kind,), open=True)

    def select_outline_item(self, item_id: str) -> None:
        """Select and reveal an outline item."""
        self.outline_tree.see(item_id)
        self.outline_tree.selection_set(item_id)

    def get_selected_outline_item(self) -> Optional[str]:
        selection = self.outline_tree.selection()
        return selection[0] if selection else None

    def update_status(self, message: str) -> None:
        """
        Update the status bar message.

        Args:
            message: The message to display
        """
        self.status_var.set(message)

    def update_coordinates(self, x: float, y: float) -> None:
        """
        Update the coordinates display.

        Args:
            x: X coordinate
            y: Y coordinate
        """
        self.coords_var.set(f"X: {x:.2f}  Y: {y:.2f}")

    def show_message(self, title: str, message: str, message_type: str = "info") -> None:
        """
        Show a message dialog.

        Args:
            title: Dialog title
            message: Message to display
            message_type: Type of message ("info", "error", or "warning")
        """
        if message_type == "error":
            messagebox.showerror(title, message)
        elif message_type == "warning":
            messagebox.showwarning(title, message)
        else:
            messagebox.showinfo(title, message)

    def get_open_filename(self) -> Optional[str]:
        """
        Show file open dialog.

        Returns:
            Selected file path or None if cancelled
        """
        filepath = filedialog.askopenfilename(
            title="Open Design Export",
            filetypes=[("Design Exports", "*.json"), ("All Files", "*.*")]
        )
        return filepath if filepath else None
