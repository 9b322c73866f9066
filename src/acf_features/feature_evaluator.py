#########################################################
## AUTHOR: James Beasley                               ##
## DATE: April 8, 2017                                 ##
## ACF: Aggregated Channel Features (Object Detection) ##
#########################################################

#############
## IMPORTS ##
#############
import operator
import numpy as np
from acf_features.feature_processor import BLOCK_SIZE, CHANNEL_COUNT, Feature
from acf_features.logging_utils import get_logger

logger = get_logger(__name__)

###############
## FUNCTIONS ##
###############

#aggregate a channel into non-overlapping block_size x block_size cells, each holding the sum of its truncated pixel values
#trailing rows/columns that don't fill a whole block are dropped
def pool_channel(channel, block_size=BLOCK_SIZE):
    channel = np.asarray(channel)
    if (channel.ndim != 2):
        raise ValueError("Expected a single channel 2d array, got shape {}".format(channel.shape))
    #size of the pooled grid
    pooled_rows = channel.shape[0] // block_size
    pooled_cols = channel.shape[1] // block_size
    #crop off the partial blocks, then truncate each pixel value toward zero
    cropped_channel = channel[:pooled_rows * block_size, :pooled_cols * block_size].astype(np.int32)
    #split into (row block, row in block, col block, col in block) and sum within each block
    blocks = cropped_channel.reshape(pooled_rows, block_size, pooled_cols, block_size)
    return blocks.sum(axis=(1, 3), dtype=np.int32)

#############
## CLASSES ##
#############

#binds a fixed feature catalog to a channel stack and evaluates pooled feature values
#set_channels() must be called before evaluate() / evaluate_all(), each binding fully replaces the previous one
class FeatureEvaluator:

    def __init__(self, features, block_size=BLOCK_SIZE, channel_count=CHANNEL_COUNT):
        #take an immutable copy of the catalog
        self._features = tuple(Feature(*feature) for feature in features)
        if (len(self._features) == 0):
            raise ValueError("Feature evaluator needs at least one feature")
        for feature in self._features:
            if not (0 <= feature.channel < channel_count):
                raise ValueError("Feature {} references a channel outside [0, {})".format(tuple(feature), channel_count))
            #negative grid coordinates would wrap around to the far edge of the pooled grid
            if ((feature.x < 0) or (feature.y < 0)):
                raise ValueError("Feature {} has a negative grid coordinate".format(tuple(feature)))
        self._block_size = block_size
        self._channel_count = channel_count
        #catalog columns used for vectorized lookup
        catalog = np.array(self._features, dtype=np.intp)
        self._xs = catalog[:, 0]
        self._ys = catalog[:, 1]
        self._channel_indices = catalog[:, 2]
        #pooled channels (channel, row, col) and window position
        self._channels = None
        self._position = (0, 0)

    @property
    def features(self):
        return self._features

    @property
    def feature_count(self):
        return len(self._features)

    @property
    def block_size(self):
        return self._block_size

    @property
    def channel_count(self):
        return self._channel_count

    @property
    def position(self):
        return self._position

    @property
    def is_bound(self):
        return self._channels is not None

    #pool and store a stack of exactly channel_count same-sized channels
    def set_channels(self, channels):
        channels = list(channels)
        if (len(channels) != self._channel_count):
            raise ValueError("Expected {} channels, got {}".format(self._channel_count, len(channels)))
        #pool every channel (the pooled copies are all we keep, the caller is free to reuse its buffers)
        pooled_channels = [pool_channel(cur_channel, self._block_size) for cur_channel in channels]
        pooled_shape = pooled_channels[0].shape
        for pooled_channel in pooled_channels:
            if (pooled_channel.shape != pooled_shape):
                raise ValueError("All channels must share the same dimensions")
        #replace any previously bound channels
        self._channels = np.stack(pooled_channels)
        logger.debug("bound %d channels pooled to %s", len(pooled_channels), pooled_shape)

    #record the window offset (width, height) of the bound channel stack
    #the offset is bookkeeping for the sliding window driver, lookups are relative to the bound stack's origin
    def set_position(self, position):
        width, height = position
        self._position = (width, height)

    #pooled value of a single cataloged feature
    def evaluate(self, feature_index):
        if (self._channels is None):
            raise RuntimeError("Channels must be set before evaluating features")
        #only integer indices (a float index raises TypeError here)
        feature_index = operator.index(feature_index)
        if not (0 <= feature_index < len(self._features)):
            raise IndexError("Feature index {} out of range for {} features".format(feature_index, len(self._features)))
        feature = self._features[feature_index]
        #row-major lookup, y selects the row
        return int(self._channels[feature.channel, feature.y, feature.x])

    #pooled values of every cataloged feature, in catalog order
    #out, when supplied, must be an int32 vector with one entry per feature
    def evaluate_all(self, out=None):
        if (self._channels is None):
            raise RuntimeError("Channels must be set before evaluating features")
        feature_values = self._channels[self._channel_indices, self._ys, self._xs]
        if (out is None):
            return feature_values.astype(np.int32)
        if (out.shape != (len(self._features),)):
            raise ValueError("Output vector has shape {}, expected ({},)".format(out.shape, len(self._features)))
        out[:] = feature_values
        return out

#create an evaluator for the supplied feature catalog
def create_feature_evaluator(features, block_size=BLOCK_SIZE, channel_count=CHANNEL_COUNT):
    return FeatureEvaluator(features, block_size, channel_count)
