"""
Rectangles over Image - draw rectangles over a picture and save the result.

Built with PyQt6. Rectangles drawn over the fitted image are rescaled to the
picture's native resolution when the flattened PNG is written.
"""

__version__ = "1.0.0"
__author__ = "Rectangles over Image Team"
