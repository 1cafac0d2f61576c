
from proxlib.calculus.separable_sum import *
