#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
import cv2
import numpy as np
from acf_features.feature_processor import CHANNEL_COUNT
from acf_features.logging_utils import get_logger

logger = get_logger(__name__)

###############
## CONSTANTS ##
###############

ORIENTATION_BIN_COUNT = 6     #number of orientation bins spanning the 180 degree half circle
ORIENTATION_BIN_DEGREES = 30  #angular width of each orientation bin (180 / 6)
BASE_CHANNEL_COUNT = 2 + ORIENTATION_BIN_COUNT  #grayscale + gradient magnitude + orientation bins

###############
## FUNCTIONS ##
###############

#map each pixel's gradient orientation to an orientation bin index in [0, ORIENTATION_BIN_COUNT - 1]
def compute_orientation_bins(row_derivative, col_derivative):
    #compute the gradient orientation in degrees, range is (-180, 180]
    angle = np.degrees(np.arctan2(row_derivative, col_derivative))
    #fold negative angles into [0, 180] (the gradient magnitude is the same for opposing directions)
    angle = np.where(angle < 0, angle + 180, angle)
    #assign each pixel to a 30 degree bucket
    bins = (angle / ORIENTATION_BIN_DEGREES).astype(np.int32)
    #an angle of exactly 180 lands one past the last bucket, clamp it into the last one
    return np.minimum(bins, ORIENTATION_BIN_COUNT - 1)

#decompose an rgb image into grayscale, gradient magnitude, and oriented gradient channels (returned as a list of float32 2d arrays)
def compute_channels(image):
    #treat the supplied image as immutable
    image = np.asarray(image)
    #verify we have something to work with
    if (image.size == 0):
        raise ValueError("Cannot compute channels of an empty image")
    #verify we have an 8-bit, 3 component color image
    if ((image.ndim != 3) or (image.shape[2] != 3)):
        raise ValueError("Expected a 3 channel color image, got shape {}".format(image.shape))
    if (image.dtype != np.uint8):
        raise ValueError("Expected 8-bit image components, got dtype {}".format(image.dtype))
    #normalize pixel intensities to [0, 1]
    normalized_image = image.astype(np.float32) / 255
    #convert to a single channel luma image
    gray = cv2.cvtColor(normalized_image, cv2.COLOR_RGB2GRAY)
    #take the first derivative across rows (y) and columns (x) with a 3x3 sobel kernel
    row_derivative = cv2.Sobel(gray, cv2.CV_32F, 0, 1)
    col_derivative = cv2.Sobel(gray, cv2.CV_32F, 1, 0)
    #per-pixel euclidean norm of the two derivatives
    gradient_magnitude = cv2.magnitude(row_derivative, col_derivative)
    #find the orientation bin of each pixel
    orientation_bins = compute_orientation_bins(row_derivative, col_derivative)
    #assemble the channel stack (order matters, features reference channels by index)
    channels = [gray, gradient_magnitude]
    #each orientation channel holds the gradient magnitude where the pixel falls in that bin and zero elsewhere
    for cur_bin in range(ORIENTATION_BIN_COUNT):
        channels.append(np.where(orientation_bins == cur_bin, gradient_magnitude, 0).astype(np.float32))
    logger.debug("computed %d channels of shape %s", len(channels), gray.shape)
    #return channel stack
    return channels

#pad a channel stack with zero-filled channels so it fills the reserved channel slots the evaluator expects
def complete_channel_stack(channels, channel_count=CHANNEL_COUNT):
    #copy so the caller's list is left alone
    channels = list(channels)
    if (len(channels) == 0):
        raise ValueError("Cannot complete an empty channel stack")
    if (len(channels) > channel_count):
        raise ValueError("Channel stack holds {} channels, more than the {} slots available".format(len(channels), channel_count))
    #all channels in a stack share the same spatial dimensions
    channel_shape = np.shape(channels[0])
    for cur_channel in channels:
        if (np.shape(cur_channel) != channel_shape):
            raise ValueError("Channel shapes differ: {} vs {}".format(np.shape(cur_channel), channel_shape))
    #fill the remaining slots
    while (len(channels) < channel_count):
        channels.append(np.zeros(channel_shape, dtype=np.float32))
    #return the completed stack
    return channels
