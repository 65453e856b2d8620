"""
Copyright 2026 optical-bench-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math

import svgwrite

if __name__ == "__main__":
    from optical_bench_shapely.core import mueller
    from optical_bench_shapely.core.segment import SegmentType
else:
    from . import mueller
    from .segment import SegmentType


# Stroke color per interaction segment type
SEGMENT_COLORS = {
    SegmentType.MIRROR_FRONT: 'rgb(70, 130, 180)',
    SegmentType.BLOCKER: 'rgb(40, 40, 40)',
    SegmentType.SPLITTER: 'rgb(100, 180, 220)',
    SegmentType.PBS: 'rgb(60, 90, 200)',
    SegmentType.WAVEPLATE: 'rgb(150, 80, 200)',
    SegmentType.AOM: 'rgb(220, 140, 30)',
    SegmentType.LENS: 'rgb(0, 150, 200)',
    SegmentType.FIBER_INPUT: 'rgb(230, 180, 0)',
    SegmentType.REFRACTOR: 'rgb(120, 200, 220)',
}

# Fill for elements drawn by their body only
BODY_FILLS = {
    'laser': 'rgb(60, 60, 60)',
    'amplifier': 'rgb(90, 90, 120)',
    'board': 'rgb(235, 235, 235)',
}


def intensity_to_opacity(intensity):
    """Stroke opacity for a beam, its intensity clipped to [0, 1]."""
    if intensity <= 0:
        return 0.0
    return min(1.0, max(0.0, intensity))


class SVGRenderer:
    """
    SVG renderer for an optical bench trace pass.

    The SVG is organized into layers (bottom to top):
    - objects: Elements on the bench
    - rays: Beam segments

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches the bench coordinates. This is achieved by applying a
        vertical flip transformation to each layer.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height), Y-down
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_objects (svgwrite.Group): Group for elements
        layer_rays (svgwrite.Group): Group for beam segments
    """

    def __init__(self, width=800, height=600, viewbox=None, metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): Visible area as (min_x, min_y, width, height)
                in bench (Y-up) coordinates. If None, uses (0, 0, width, height)
            metadata_level (str): How much metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes
        """
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # The Y-up viewbox maps to SVG's Y-down one with min_y -> -(min_y + height)
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # debug=False disables svgwrite's attribute validation, which rejects
        # the inkscape namespace and data-* attributes
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Objects'}
        ))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Rays'}
        ))

    @classmethod
    def for_scene(cls, scene, margin=50.0, width=800, height=600, metadata_level='full'):
        """
        Create a renderer whose viewbox covers all elements of the scene.

        Args:
            scene: The Scene to frame
            margin (float): Extra space around the elements (mm)

        Returns:
            SVGRenderer
        """
        bounds = [obj.body_polygon().bounds for obj in scene.objs if hasattr(obj, 'body_polygon')]
        if not bounds:
            return cls(width, height, metadata_level=metadata_level)
        min_x = min(b[0] for b in bounds) - margin
        min_y = min(b[1] for b in bounds) - margin
        max_x = max(b[2] for b in bounds) + margin
        max_y = max(b[3] for b in bounds) + margin
        return cls(width, height, viewbox=(min_x, min_y, max_x - min_x, max_y - min_y),
                   metadata_level=metadata_level)

    def _normalize_coord(self, value):
        """Map -0.0 and values within 1e-10 of zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def draw_ray_segment(self, seg, color_by='polarization', stroke_width=1.5):
        """
        Draw one beam segment.

        Args:
            seg (RaySegment): The segment to draw
            color_by (str): 'polarization' for the Stokes false color,
                'intensity' for the beam's own color tag
            stroke_width (float): Line width (default: 1.5)

        Raises:
            ValueError: If color_by is not a known mode
        """
        if color_by == 'polarization':
            r, g, b = mueller.polarization_color(seg.stokes)
        elif color_by == 'intensity':
            r, g, b = seg.color
        else:
            raise ValueError(
                f"Invalid color_by '{color_by}'. Valid options: ('polarization', 'intensity')"
            )

        coords = (seg.p1.x, seg.p1.y, seg.p2.x, seg.p2.y)
        if not all(math.isfinite(c) for c in coords):
            return

        clipped = self._clip_to_viewbox(*coords)
        if clipped is None:
            return
        x1, y1, x2, y2 = (self._normalize_coord(c) for c in clipped)

        line = self.dwg.line(
            start=(x1, y1),
            end=(x2, y2),
            stroke=f'rgb({r}, {g}, {b})',
            stroke_width=stroke_width,
            stroke_opacity=intensity_to_opacity(seg.intensity),
        )
        if self.metadata_level != 'none':
            line['class'] = 'ray'
            line['inkscape:label'] = (
                f'I={seg.intensity:.3f} {mueller.describe_polarization(seg.stokes)}'
            )
        if self.metadata_level == 'full':
            line['data-intensity'] = f'{seg.intensity:.6f}'
            line['data-stokes'] = ' '.join(f'{v:.6f}' for v in seg.stokes)
        self.layer_rays.add(line)

    def draw_element(self, obj, stroke_width=2):
        """
        Draw an element: its body outline plus its interaction segments.

        Elements without segments (lasers, amplifiers, boards) are drawn as
        a filled body.

        Args:
            obj: The element to draw
            stroke_width (float): Width of segment strokes
        """
        group = self.dwg.g()
        self._attach_scene_obj_metadata(group, obj, css_class=f'element {obj.type}')

        segments = obj.get_segments()
        body = [
            (self._normalize_coord(x), self._normalize_coord(y))
            for x, y in list(obj.body_polygon().exterior.coords)[:-1]
        ]
        if segments:
            group.add(self.dwg.polygon(
                points=body, fill='none', stroke='lightgray', stroke_width=0.5
            ))
        else:
            group.add(self.dwg.polygon(
                points=body, fill=BODY_FILLS.get(obj.type, 'gray'), fill_opacity=0.6,
                stroke='black', stroke_width=0.5
            ))

        for segment in segments:
            line = self.dwg.line(
                start=(self._normalize_coord(segment.p1.x), self._normalize_coord(segment.p1.y)),
                end=(self._normalize_coord(segment.p2.x), self._normalize_coord(segment.p2.y)),
                stroke=SEGMENT_COLORS.get(segment.type, 'gray'),
                stroke_width=stroke_width,
            )
            if self.metadata_level == 'full':
                line['data-segment-type'] = segment.type.value
            group.add(line)

        self.layer_objects.add(group)

    def _attach_scene_obj_metadata(self, element, scene_obj, css_class='scene-obj'):
        """
        Attach id, inkscape:label, class, and data-uuid from an element.

        Respects self.metadata_level:
        - 'none': no metadata attached
        - 'standard': id + inkscape:label + class
        - 'full': standard + data-uuid
        """
        if self.metadata_level == 'none':
            return
        element['id'] = f'obj-{scene_obj.uuid}'
        element['inkscape:label'] = scene_obj.get_display_name()
        element['class'] = css_class
        if self.metadata_level == 'full':
            element['data-uuid'] = scene_obj.uuid

    def draw_scene(self, scene, segments=None, draw_rays=True, draw_objects=True,
                   color_by='polarization'):
        """
        Draw all elements of a scene and the beam segments of a trace pass.

        Args:
            scene: The Scene to draw
            segments: RaySegments to draw, e.g. from Simulator.run()
            draw_rays (bool): Whether to draw segments (default: True)
            draw_objects (bool): Whether to draw elements (default: True)
            color_by (str): Passed to draw_ray_segment

        Returns:
            bool: True on success.
        """
        if draw_objects:
            boards = [obj for obj in scene.objs if obj.type == 'board']
            others = [obj for obj in scene.objs if obj.type != 'board']
            for obj in boards + others:
                self.draw_element(obj)

        if draw_rays and segments:
            for seg in segments:
                self.draw_ray_segment(seg, color_by=color_by)

        return True

    def _clip_to_viewbox(self, x1, y1, x2, y2):
        """
        Clip a line segment to the viewbox (Liang-Barsky).

        Returns:
            (x1, y1, x2, y2) of the clipped segment, or None if it is
            completely outside
        """
        min_x, min_y, width, height = self.user_viewbox
        max_x = min_x + width
        max_y = min_y + height

        dx = x2 - x1
        dy = y2 - y1
        t0, t1 = 0.0, 1.0

        for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
            if abs(p) < 1e-10:
                if q < 0:
                    return None
            else:
                t = q / p
                if p < 0:
                    t0 = max(t0, t)
                else:
                    t1 = min(t1, t)

        if t0 > t1:
            return None
        return (x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()


# Example usage and testing
if __name__ == "__main__":
    from optical_bench_shapely.core.scene import Scene
    from optical_bench_shapely.core.simulator import Simulator

    scene = Scene()
    scene.add_element({'type': 'laser', 'x': 0, 'y': 0})
    scene.add_element({'type': 'qwp', 'x': 100, 'y': 0})
    scene.add_element({'type': 'splitter', 'x': 200, 'y': 0})
    scene.add_element({'type': 'blocker', 'x': 350, 'y': 0})

    segments = Simulator(scene).run()
    renderer = SVGRenderer.for_scene(scene)
    renderer.draw_scene(scene, segments)
    renderer.save('bench_demo.svg')
    print(f"Wrote bench_demo.svg with {len(segments)} beam segments")
