from .classes import oil_pvt_approach, gas_pvt_approach, water_pvt_approach, phase, component, class_dic
