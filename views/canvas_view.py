"""
Canvas view for the Lanhu UI Builder.
"""
import base64
import tkinter as tk
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from domain.geometry.coordinates import Y_DOWN
from domain.geometry.point import Point
from domain.geometry.size import Size
from models.element_factory import ElementFactory
from models.exceptions import ImageFetchFailed
from models.hierarchy_builder import HierarchyBuilder
from models.node import Node, NodeKind
from utils.constants import (
    KIND_OUTLINE_COLORS, IMAGE_PLACEHOLDER_FILL, GROUP_OUTLINE_DASH, TEXT_FONT,
    SELECTED_ELEMENT_COLOR, SELECTED_ELEMENT_WIDTH, NORMAL_ELEMENT_WIDTH, CANVAS_PADDING
)
from views.image_loader import ImageLoader

# Configure logging
logger = logging.getLogger(__name__)


def _create_photo(data: bytes) -> tk.PhotoImage:
    return tk.PhotoImage(data=base64.b64encode(data))


@dataclass(eq=False)
class CanvasElement:
    """Handle for one node drawn on the canvas."""
    node: Node
    tag: str
    item_id: int
    origin_x: float  # Absolute design-space position of the top-left corner
    origin_y: float
    image_item: Optional[int] = None
    photo: Any = None  # Keeps the PhotoImage alive while it is displayed


class CanvasElementFactory(ElementFactory):
    """Draws design nodes as Tk canvas items, in unzoomed design coordinates."""

    def __init__(self, canvas: tk.Canvas, image_loader: Optional[ImageLoader] = None,
                 photo_factory: Callable[[bytes], Any] = _create_photo) -> None:
        """
        Initialize the factory.

        Args:
            canvas: The Tkinter canvas to draw on
            image_loader: Loader for image sources; images stay placeholders without one
            photo_factory: Turns downloaded bytes into a Tk image
        """
        self.canvas = canvas
        self.image_loader = image_loader
        self.photo_factory = photo_factory
        self.elements: List[CanvasElement] = []

    def create_element(self, kind: NodeKind, node: Node, size: Size, position: Point) -> CanvasElement:
        tag = f"element_{len(self.elements) + 1}"
        x0, y0 = position.as_tuple()
        x1, y1 = x0 + size.width, y0 + size.height
        outline = KIND_OUTLINE_COLORS[kind.value]
        state = tk.HIDDEN if size.is_empty else tk.NORMAL

        if kind is NodeKind.TEXT:
            item_id = self.canvas.create_text(
                x0, y0,
                anchor=tk.NW,
                text="",
                width=size.width,
                fill=outline,
                font=TEXT_FONT,
                state=state,
                tags=(tag, kind.value)
            )
        elif kind is NodeKind.IMAGE:
            item_id = self.canvas.create_rectangle(
                x0, y0, x1, y1,
                fill=IMAGE_PLACEHOLDER_FILL,
                outline=outline,
                width=NORMAL_ELEMENT_WIDTH,
                state=state,
                tags=(tag, kind.value)
            )
        else:
            item_id = self.canvas.create_rectangle(
                x0, y0, x1, y1,
                outline=outline,
                width=NORMAL_ELEMENT_WIDTH,
                dash=GROUP_OUTLINE_DASH,
                state=state,
                tags=(tag, kind.value)
            )

        element = CanvasElement(node=node, tag=tag, item_id=item_id, origin_x=x0, origin_y=y0)
        self.elements.append(element)
        return element

    def set_text(self, handle: CanvasElement, text: str) -> None:
        self.canvas.itemconfigure(handle.item_id, text=text)

    def attach_child(self, parent: CanvasElement, child: CanvasElement) -> None:
        # Children are drawn relative to their parent's top-left corner
        self.canvas.move(child.tag, parent.origin_x, parent.origin_y)
        child.origin_x += parent.origin_x
        child.origin_y += parent.origin_y

    def fetch_and_fill_image(self, handle: CanvasElement, source: str) -> None:
        if self.image_loader is None:
            super().fetch_and_fill_image(handle, source)
            return
        self.image_loader.request(source, lambda data: self._fill_image(handle, data))

    def _fill_image(self, element: CanvasElement, data: bytes) -> None:
        """Place a downloaded picture over the element's placeholder."""
        try:
            photo = self.photo_factory(data)
        except tk.TclError as e:
            logger.warning(str(ImageFetchFailed(element.node.image_source or "", f"unsupported image data: {e}")))
            return

        coords = self.canvas.coords(element.item_id)
        if not coords:
            # The design was re-rendered before the download finished
            return

        element.photo = photo
        element.image_item = self.canvas.create_image(
            coords[0], coords[1],
            anchor=tk.NW,
            image=photo,
            tags=(element.tag,)
        )
        self.canvas.tag_raise(element.image_item, element.item_id)


class CanvasView:
    """Handles rendering a design document on the canvas."""

    def __init__(self, canvas: tk.Canvas, image_loader: Optional[ImageLoader] = None) -> None:
        """
        Initialize the canvas view.

        Args:
            canvas: The Tkinter canvas to render on
            image_loader: Loader used for image nodes
        """
        self.canvas = canvas
        self.image_loader = image_loader

        # View state variables
        self.zoom_level = 1.0
        self.pan_offset_x = 0.0
        self.pan_offset_y = 0.0

        # Rendered elements
        self.factory: Optional[CanvasElementFactory] = None
        self.elements_by_node: Dict[int, CanvasElement] = {}
        self.elements_by_item: Dict[int, CanvasElement] = {}
        self.highlighted: Optional[CanvasElement] = None

    def render_design(self, root: Node) -> CanvasElement:
        """
        Draw the design tree on the canvas with the current zoom and pan.

        Args:
            root: Root node of the design

        Returns:
            Canvas element of the root node

        Raises:
            ElementCreationFailed: If the canvas rejects an element
        """
        self.canvas.delete("all")
        self.highlighted = None

        self.factory = CanvasElementFactory(self.canvas, self.image_loader)
        root_element = HierarchyBuilder(self.factory, convention=Y_DOWN).build(root)

        self.elements_by_node = {id(element.node): element for element in self.factory.elements}
        self.elements_by_item = {element.item_id: element for element in self.factory.elements}

        # Items are drawn in design units; move them into screen space
        self.canvas.scale("all", 0, 0, self.zoom_level, self.zoom_level)
        self.canvas.move("all", self.pan_offset_x, self.pan_offset_y)

        logger.info(f"Rendered {len(self.factory.elements)} elements")
        return root_element

    def highlight(self, node: Optional[Node]) -> bool:
        """
        Highlight the element drawn for ``node``, clearing any previous highlight.

        Args:
            node: Node to highlight, or None to only clear

        Returns:
            True if an element was highlighted
        """
        if self.highlighted is not None:
            self._style_element(self.highlighted, selected=False)
            self.highlighted = None

        if node is None:
            return False

        element = self.elements_by_node.get(id(node))
        if element is None:
            return False

        self._style_element(element, selected=True)
        self.highlighted = element
        return True

    def _style_element(self, element: CanvasElement, selected: bool) -> None:
        color = SELECTED_ELEMENT_COLOR if selected else KIND_OUTLINE_COLORS[element.node.kind.value]
        if element.node.kind is NodeKind.TEXT:
            self.canvas.itemconfigure(element.item_id, fill=color)
        else:
            width = SELECTED_ELEMENT_WIDTH if selected else NORMAL_ELEMENT_WIDTH
            self.canvas.itemconfigure(element.item_id, outline=color, width=width)

    def find_element_at_position(self, screen_x: float, screen_y: float) -> Optional[CanvasElement]:
        """
        Find the topmost element at the given screen position.

        Args:
            screen_x: Screen X coordinate
            screen_y: Screen Y coordinate

        Returns:
            The element, or None if nothing is drawn there
        """
        for item_id in reversed(self.canvas.find_overlapping(screen_x, screen_y, screen_x, screen_y)):
            element = self.elements_by_item.get(item_id)
            if element is not None:
                return element
        return None

    def model_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        """
        Convert design coordinates to screen coordinates.

        Args:
            x: Design X coordinate
            y: Design Y coordinate

        Returns:
            Tuple of screen coordinates (x, y)
        """
        # Both spaces are Y-down; only zoom and pan differ
        return x * self.zoom_level + self.pan_offset_x, y * self.zoom_level + self.pan_offset_y

    def screen_to_model(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """
        Convert screen coordinates to design coordinates.

        Args:
            screen_x: Screen X coordinate
            screen_y: Screen Y coordinate

        Returns:
            Tuple of design coordinates (x, y)
        """
        model_x = (screen_x - self.pan_offset_x) / self.zoom_level
        model_y = (screen_y - self.pan_offset_y) / self.zoom_level
        return model_x, model_y

    def zoom_at(self, screen_x: float, screen_y: float, factor: float) -> None:
        """
        Zoom by ``factor`` keeping the given screen point fixed.

        Args:
            screen_x: Screen X coordinate of the zoom center
            screen_y: Screen Y coordinate of the zoom center
            factor: Multiplier applied to the zoom level
        """
        self.zoom_level *= factor
        self.pan_offset_x = screen_x + (self.pan_offset_x - screen_x) * factor
        self.pan_offset_y = screen_y + (self.pan_offset_y - screen_y) * factor
        self.canvas.scale("all", screen_x, screen_y, factor, factor)

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space offset."""
        self.pan_offset_x += dx
        self.pan_offset_y += dy
        self.canvas.move("all", dx, dy)

    def zoom_to_fit(self, model_min_x: float, model_min_y: float,
                    model_max_x: float, model_max_y: float) -> None:
        """
        Zoom to fit the entire design in the canvas.

        Takes effect on the next render_design call.

        Args:
            model_min_x: Minimum X coordinate of the design
            model_min_y: Minimum Y coordinate of the design
            model_max_x: Maximum X coordinate of the design
            model_max_y: Maximum Y coordinate of the design
        """
        # Get canvas dimensions
        canvas_width = self.canvas.winfo_width()
        canvas_height = self.canvas.winfo_height()

        # Ensure we have valid dimensions
        if canvas_width < 10 or canvas_height < 10:
            logger.warning("Canvas dimensions not ready for zoom_to_fit")
            return

        # Calculate design dimensions with padding
        model_width = (model_max_x - model_min_x) * (1 + CANVAS_PADDING * 2)
        model_height = (model_max_y - model_min_y) * (1 + CANVAS_PADDING * 2)

        # Calculate zoom level to fit
        zoom_x = canvas_width / model_width if model_width > 0 else 1.0
        zoom_y = canvas_height / model_height if model_height > 0 else 1.0
        self.zoom_level = min(zoom_x, zoom_y)

        # Calculate pan offset to center the design
        center_x = (model_min_x + model_max_x) / 2
        center_y = (model_min_y + model_max_y) / 2

        self.pan_offset_x = canvas_width / 2 - center_x * self.zoom_level
        self.pan_offset_y = canvas_height / 2 - center_y * self.zoom_level
