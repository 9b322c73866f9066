#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
from typing import NamedTuple
from acf_features.logging_utils import get_logger

logger = get_logger(__name__)

###############
## CONSTANTS ##
###############

BLOCK_SIZE = 4      #pixels per side of a pooling block (features live on this block grid)
CHANNEL_COUNT = 10  #channel slots a feature may reference (includes slots reserved for extra channels)

#############
## CLASSES ##
#############

#a single candidate feature: block grid column (x), block grid row (y), and channel index
class Feature(NamedTuple):
    x: int
    y: int
    channel: int

###############
## FUNCTIONS ##
###############

#the number of distinct (x, y, channel) features a window can hold
def compute_max_feature_count(window_size, block_size=BLOCK_SIZE, channel_count=CHANNEL_COUNT):
    #window_size is (width, height) in pixels
    width, height = window_size
    return (width // block_size) * (height // block_size) * channel_count

#enumerate a deterministic catalog of candidate features for a window of the supplied (width, height)
#features are generated x-major, then y, then channel, and generation stops once count features exist
def generate_features(window_size, count, block_size=BLOCK_SIZE, channel_count=CHANNEL_COUNT):
    #verify the requested count and window
    if (count <= 0):
        raise ValueError("Requested feature count must be positive, got {}".format(count))
    width, height = window_size
    if ((width <= 0) or (height <= 0)):
        raise ValueError("Window size must be positive, got {}".format(tuple(window_size)))
    #never generate more features than the grid and channel space allows
    count = min(count, compute_max_feature_count(window_size, block_size, channel_count))
    #local vars
    features = []  #ordered catalog, index i maps to component i of every feature vector
    #traverse the block grid
    for x in range(width // block_size):
        for y in range(height // block_size):
            for channel in range(channel_count):
                #stop the instant we reach the target count
                if (len(features) == count):
                    logger.debug("generated %d features for window %dx%d", len(features), width, height)
                    return features
                features.append(Feature(x, y, channel))
    logger.debug("generated %d features for window %dx%d", len(features), width, height)
    #return catalog
    return features
