# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Small dlib net_to_xml() documents and record helpers shared by the tests."""

from __future__ import annotations

import io

from dlib2caffe.graph import LayerKind, LayerRecord, parse_net_xml

# loss <- fc <- relu <- con <- input_rgb_image, stored output-first
SIMPLE_CNN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<net>
<layer idx="0" type="loss">
<loss_multiclass_log/>
</layer>
<layer idx="1" type="comp">
<fc num_outputs="2" learning_rate_mult="1" weight_decay_mult="1" bias_learning_rate_mult="1" bias_weight_decay_mult="0">
1 2
3 4
5 6
0.5 -0.5
</fc>
</layer>
<layer idx="2" type="comp">
<relu/>
</layer>
<layer idx="3" type="comp">
<con num_filters="2" nr="1" nc="1" stride_y="1" stride_x="1" padding_y="0" padding_x="0">
0.1
0.2
0.3
0.4
0.5
0.6
0.7
0.8
</con>
</layer>
<layer idx="4" type="input">
<input_rgb_image r="122.782" g="117.001" b="104.298"/>
</layer>
</net>
"""

# add_prev1 sums relu3 (its predecessor) with relu5 (tagged 1)
RESIDUAL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<net>
<layer idx="0" type="loss">
<loss_multiclass_log/>
</layer>
<layer idx="1" type="comp">
<fc_no_bias num_outputs="2">
1 2
3 4
</fc_no_bias>
</layer>
<layer idx="2" type="comp">
<add_prev tag="1"/>
</layer>
<layer idx="3" type="comp">
<relu/>
</layer>
<layer idx="4" type="comp">
<affine_con>
2
3
0.5
-0.5
</affine_con>
</layer>
<layer type="tag" id="1"></layer>
<layer idx="5" type="comp">
<relu/>
</layer>
<layer idx="6" type="input">
<input/>
</layer>
</net>
"""

# relu1 reads from max_pool3 (tagged 1) instead of its predecessor relu2
SKIP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<net>
<layer idx="0" type="loss">
<loss_multiclass_log/>
</layer>
<layer idx="1" type="comp">
<relu/>
</layer>
<layer type="skip" id="1"></layer>
<layer idx="2" type="comp">
<relu/>
</layer>
<layer type="tag" id="1"></layer>
<layer idx="3" type="comp">
<max_pool nr="2" nc="2" stride_y="2" stride_x="2" padding_y="0" padding_x="0"/>
</layer>
<layer idx="4" type="input">
<input_rgb_image_sized nr="150" nc="150"/>
</layer>
</net>
"""


def parse_text(text: str):
    return parse_net_xml(io.BytesIO(text.encode("utf-8")))


def make_record(kind=LayerKind.COMPUTATIONAL, idx=0, detail_name="relu", params=None, tag_id=None, skip_id=None, **attributes):
    return LayerRecord(
        kind=kind,
        sequence_index=idx,
        detail_name=detail_name,
        attributes={key: float(value) for key, value in attributes.items()},
        params=params,
        tag_id=tag_id,
        skip_id=skip_id,
    )


def make_input(detail_name="input_rgb_image", idx=99, **attributes):
    return make_record(kind=LayerKind.INPUT, idx=idx, detail_name=detail_name, **attributes)


def make_loss(idx=0):
    return make_record(kind=LayerKind.LOSS, idx=idx, detail_name="loss_multiclass_log")
