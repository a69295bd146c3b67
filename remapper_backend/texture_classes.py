from typing import List, Literal, Optional, Tuple, TypedDict
from dataclasses import dataclass, field


ChannelName = Literal["R", "G", "B", "A"]

CHANNEL_ORDER: Tuple[ChannelName, ...] = ("R", "G", "B", "A") # Pixel tuple order; a channel's position is its index.


class ChannelMapping(TypedDict):
    R: Optional[str] # Image whose data goes into the red channel.
    G: Optional[str]
    B: Optional[str]
    A: Optional[str]


@dataclass
class RemapResult:
    operation: str # Operation name, e.g., "split-multi".
    output_paths: List[str] = field(default_factory=list) # Files written, in the order they were created.
    resolution: Tuple[int, int] = (0, 0) # Processed image size (width, height).
