
from proxlib.functions.affine import *
from proxlib.functions.indicators import *
from proxlib.functions.norms import *
from proxlib.functions.quad import *
